"""
Core type node definitions.

These nodes are the language-neutral type algebra shared by the emitter
and the parser. Anything that cannot be expressed with these classes is
not representable and is rejected by both directions.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from ..errors import MalformedLiteralError


class NodeKind(str, Enum):
    """Discriminator of a type node."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ANY = "any"
    OBJECT = "object"
    TUPLE = "tuple"
    OR = "or"
    AND = "and"
    REF = "ref"
    ENUM = "enum"
    CONST = "const"


@dataclass
class Annotations:
    """Documentation attached to a node."""

    title: str | None = None
    description: str | None = None
    examples: list[str] | None = None
    default: str | None = None
    see: list[str] | None = None

    def is_empty(self) -> bool:
        return not (self.title or self.description or self.examples or self.default or self.see)


@dataclass
class TypeNode:
    """Base class for all type nodes."""

    kind: ClassVar[NodeKind]

    title: str | None = None
    description: str | None = None
    examples: list[str] | None = None
    default: str | None = None
    see: list[str] | None = None

    @property
    def annotations(self) -> Annotations:
        return Annotations(
            title=self.title,
            description=self.description,
            examples=self.examples,
            default=self.default,
            see=self.see,
        )

    def set_annotations(self, annotations: Annotations) -> None:
        self.title = annotations.title
        self.description = annotations.description
        self.examples = annotations.examples
        self.default = annotations.default
        self.see = annotations.see

    def has_annotations(self) -> bool:
        return not self.annotations.is_empty()


@dataclass
class StringNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.STRING


@dataclass
class NumberNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.NUMBER


@dataclass
class BooleanNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.BOOLEAN


@dataclass
class NullNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.NULL


@dataclass
class AnyNode(TypeNode):
    """The unconstrained top type."""

    kind: ClassVar[NodeKind] = NodeKind.ANY


@dataclass
class Property:
    """A property of an object node."""

    node: TypeNode | None = None
    required: bool = False


@dataclass
class ObjectNode(TypeNode):
    """An object shape.

    ``additional_properties`` is ``False`` for a closed shape, ``True`` for an
    open shape with unconstrained values, or a node constraining extra values.
    """

    kind: ClassVar[NodeKind] = NodeKind.OBJECT

    properties: dict[str, Property] = field(default_factory=dict)
    additional_properties: bool | TypeNode = False


@dataclass
class TupleNode(TypeNode):
    """A fixed-position sequence; elements before ``min_items`` are required."""

    kind: ClassVar[NodeKind] = NodeKind.TUPLE

    element_types: list[TypeNode] = field(default_factory=list)
    min_items: int = 0
    additional_items: bool | TypeNode = False


@dataclass
class OrNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.OR

    members: list[TypeNode] = field(default_factory=list)


@dataclass
class AndNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.AND

    members: list[TypeNode] = field(default_factory=list)


@dataclass
class RefNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.REF

    ref: str = ""


@dataclass
class EnumNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.ENUM

    values: list[Any] = field(default_factory=list)


@dataclass
class ConstNode(TypeNode):
    kind: ClassVar[NodeKind] = NodeKind.CONST

    value: Any = None


@dataclass
class NamedType:
    """A top-level named entry of a document."""

    name: str = ""
    node: TypeNode | None = None


@dataclass
class NodeDocument:
    """A named collection of types."""

    version: int = 1
    types: list[NamedType] = field(default_factory=list)


SCALAR_NODES: dict[NodeKind, type[TypeNode]] = {
    NodeKind.STRING: StringNode,
    NodeKind.NUMBER: NumberNode,
    NodeKind.BOOLEAN: BooleanNode,
    NodeKind.NULL: NullNode,
}


def literal_kind(value: Any, path: str = "") -> NodeKind:
    """Classify a literal value into the scalar kind it belongs to."""
    if value is None:
        return NodeKind.NULL
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, int):
        return NodeKind.NUMBER
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedLiteralError(f"Non-finite number {value!r} is not a literal", path)
        return NodeKind.NUMBER
    raise MalformedLiteralError(f"Value {value!r} is not a literal", path)


def enum_kind(node: EnumNode, path: str = "") -> NodeKind:
    """Return the single literal kind shared by all values of an enum."""
    if not node.values:
        raise MalformedLiteralError("Enum has no values", path)
    kinds = {literal_kind(value, path) for value in node.values}
    if len(kinds) > 1:
        names = ", ".join(sorted(kind.value for kind in kinds))
        raise MalformedLiteralError(f"Enum mixes literal kinds: {names}", path)
    return kinds.pop()


def walk(node: TypeNode, path: str) -> Iterator[tuple[str, TypeNode]]:
    """Yield ``(path, node)`` for a node and every node below it."""
    yield path, node
    match node:
        case ObjectNode():
            for name, prop in node.properties.items():
                yield from walk(prop.node, f"{path}/properties/{name}")
            if isinstance(node.additional_properties, TypeNode):
                yield from walk(node.additional_properties, f"{path}/additionalProperties")
        case TupleNode():
            for i, element in enumerate(node.element_types):
                yield from walk(element, f"{path}/elementTypes/{i}")
            if isinstance(node.additional_items, TypeNode):
                yield from walk(node.additional_items, f"{path}/additionalItems")
        case OrNode() | AndNode():
            for i, member in enumerate(node.members):
                yield from walk(member, f"{path}/{node.kind.value}/{i}")
