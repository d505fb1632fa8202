"""
TypeScript AST node definitions.

These nodes represent the subset of TypeScript type syntax the emitter
produces. They are built from core types and then serialized to source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..annotations import CommentBlock


@dataclass
class TsNode:
    """Base class for all TypeScript AST nodes."""

    # JSDoc block printed on the line(s) before the node
    comment: CommentBlock | None = None


@dataclass
class KeywordType(TsNode):
    """A predefined type (`string`, `number`, `any`...) or `null`."""

    keyword: str = ""


@dataclass
class LiteralType(TsNode):
    """A string, number or boolean literal type."""

    value: Any = None


@dataclass
class TypeReference(TsNode):
    name: str = ""


@dataclass
class PropertySignature(TsNode):
    name: str = ""
    optional: bool = False
    type: TsNode | None = None


@dataclass
class IndexSignature(TsNode):
    """`[key: string]: T`"""

    key_name: str = "key"
    type: TsNode | None = None


@dataclass
class TypeLiteral(TsNode):
    members: list[PropertySignature | IndexSignature] = field(default_factory=list)


@dataclass
class TupleMember(TsNode):
    type: TsNode | None = None
    optional: bool = False
    rest: bool = False


@dataclass
class TupleType(TsNode):
    elements: list[TupleMember] = field(default_factory=list)


@dataclass
class UnionType(TsNode):
    types: list[TsNode] = field(default_factory=list)


@dataclass
class IntersectionType(TsNode):
    types: list[TsNode] = field(default_factory=list)


@dataclass
class ArrayType(TsNode):
    element: TsNode | None = None


@dataclass
class ParenthesizedType(TsNode):
    type: TsNode | None = None


@dataclass
class TypeAliasDeclaration(TsNode):
    """`export type Name = T;`"""

    name: str = ""
    type: TsNode | None = None


@dataclass
class TsFile(TsNode):
    """A complete TypeScript module, or a single anonymous type expression."""

    header: str = ""
    declarations: list[TypeAliasDeclaration] = field(default_factory=list)
    expression: TsNode | None = None
