"""
TypeScript AST-based code generation backend.

Generates a TypeScript AST from a core types document.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jinja2

from ..analyzer.reference_resolver import ReferenceResolver
from ..annotations import to_comment
from ..config import EmitOptions
from ..core_types.nodes import (
    AndNode,
    AnyNode,
    BooleanNode,
    ConstNode,
    EnumNode,
    NodeDocument,
    NullNode,
    NumberNode,
    ObjectNode,
    OrNode,
    RefNode,
    StringNode,
    TupleNode,
    TypeNode,
    enum_kind,
    literal_kind,
)
from ..errors import UnsupportedNodeError
from .base import AstBackend
from .typescript_ast_nodes import (
    ArrayType,
    IndexSignature,
    IntersectionType,
    KeywordType,
    LiteralType,
    ParenthesizedType,
    PropertySignature,
    TsFile,
    TsNode,
    TupleMember,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
    UnionType,
)
from .typescript_serializer import IDENTIFIER

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates" / "typescript"

# Names that cannot be declared as a type alias
RESERVED_TYPE_NAMES = {
    "any",
    "bigint",
    "boolean",
    "never",
    "null",
    "number",
    "object",
    "string",
    "symbol",
    "undefined",
    "unknown",
    "void",
}


class TypeScriptAstBackend(AstBackend):
    """TypeScript code generation backend using a custom AST."""

    FILE_EXTENSION = "ts"

    TYPE_MAP = {
        "string": "string",
        "number": "number",
        "boolean": "boolean",
        "null": "null",
    }

    def __init__(self, options: EmitOptions):
        super().__init__(options)
        self.resolver: ReferenceResolver | None = None
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")

    @property
    def top_type(self) -> str:
        return "unknown" if self.options.use_unknown else "any"

    def generate(self, document: NodeDocument) -> TsFile:
        """Generate a TypeScript AST from a document."""
        logger.debug("Generating TypeScript AST for %d named types", len(document.types))
        self.resolver = ReferenceResolver(document)

        file = TsFile()
        if not self.options.no_descriptive_header:
            file.header = self.prefix_template.render(
                user_package=self.options.user_package,
                user_package_url=self.options.user_package_url,
            ).rstrip("\n")

        if not self.options.declaration:
            if len(document.types) != 1:
                raise UnsupportedNodeError(
                    f"An anonymous type expression needs exactly one named type, got {len(document.types)}",
                    "#/types",
                )
            named = document.types[0]
            file.expression = self.translate_type(named.node, f"#/types/{named.name}")
            file.expression.comment = to_comment(named.node)
            return file

        for named in document.types:
            path = f"#/types/{named.name}"
            if not IDENTIFIER.match(named.name) or named.name in RESERVED_TYPE_NAMES:
                raise UnsupportedNodeError(f"{named.name!r} is not a valid TypeScript type name", path)
            declaration = TypeAliasDeclaration(name=named.name, type=self.translate_type(named.node, path))
            declaration.comment = to_comment(named.node)
            file.declarations.append(declaration)

        return file

    def translate_type(self, node: TypeNode, path: str) -> TsNode:
        """Translate a core type node to its TypeScript projection."""
        match node:
            case StringNode() | NumberNode() | BooleanNode() | NullNode():
                return KeywordType(keyword=self.TYPE_MAP[node.kind.value])
            case AnyNode():
                return KeywordType(keyword=self.top_type)
            case ObjectNode():
                return self._translate_object(node, path)
            case TupleNode():
                return self._translate_tuple(node, path)
            case OrNode():
                return self._translate_or(node, path)
            case AndNode():
                types = self._translate_members(node.members, f"{path}/and", splice_enums=False)
                return self._collapse(types) or IntersectionType(types=types)
            case RefNode():
                return TypeReference(name=self.resolver.identifier_for(node, path))
            case EnumNode():
                enum_kind(node, path)
                literals = [LiteralType(value=value) for value in node.values]
                return literals[0] if len(literals) == 1 else UnionType(types=literals)
            case ConstNode():
                literal_kind(node.value, path)
                return LiteralType(value=node.value)
            case _:
                raise UnsupportedNodeError(f"Unsupported node {type(node).__name__}", path)

    def _parenthesize(self, node: TsNode) -> TsNode:
        if isinstance(node, (UnionType, IntersectionType)):
            return ParenthesizedType(type=node)
        return node

    def _collapse(self, types: list[TsNode]) -> TsNode | None:
        """A single undocumented member stands for the whole union or intersection."""
        if len(types) != 1 or types[0].comment is not None:
            return None
        only = types[0]
        return only.type if isinstance(only, ParenthesizedType) else only

    def _translate_additional(self, value: bool | TypeNode, path: str) -> TsNode | None:
        """Translate additionalProperties/additionalItems; None when closed."""
        if value is False:
            return None
        if value is True:
            return KeywordType(keyword=self.top_type)
        if isinstance(value, TypeNode):
            return self.translate_type(value, path)
        raise UnsupportedNodeError(f"Expected a boolean or a node, got {value!r}", path)

    def _translate_object(self, node: ObjectNode, path: str) -> TypeLiteral:
        literal = TypeLiteral()
        for name, prop in node.properties.items():
            prop_type = self.translate_type(prop.node, f"{path}/properties/{name}")
            literal.members.append(
                PropertySignature(
                    name=name,
                    optional=not prop.required,
                    type=prop_type,
                    comment=to_comment(prop.node),
                )
            )

        additional = node.additional_properties
        value_type = self._translate_additional(additional, f"{path}/additionalProperties")
        if value_type is not None:
            comment = to_comment(additional) if isinstance(additional, TypeNode) else None
            literal.members.append(IndexSignature(type=value_type, comment=comment))

        return literal

    def _translate_tuple(self, node: TupleNode, path: str) -> TupleType:
        count = len(node.element_types)
        if not 0 <= node.min_items <= count:
            raise UnsupportedNodeError(f"minItems {node.min_items} is outside the declared element range 0..{count}", path)

        tuple_type = TupleType()
        for i, element in enumerate(node.element_types):
            element_type = self.translate_type(element, f"{path}/elementTypes/{i}")
            optional = i >= node.min_items
            if optional:
                element_type = self._parenthesize(element_type)
            tuple_type.elements.append(TupleMember(type=element_type, optional=optional, comment=to_comment(element)))

        additional = node.additional_items
        tail_type = self._translate_additional(additional, f"{path}/additionalItems")
        if tail_type is not None:
            comment = to_comment(additional) if isinstance(additional, TypeNode) else None
            tuple_type.elements.append(TupleMember(type=ArrayType(element=self._parenthesize(tail_type)), rest=True, comment=comment))

        return tuple_type

    def _translate_members(self, members: list[TypeNode], path: str, splice_enums: bool) -> list[TsNode]:
        if not members:
            raise UnsupportedNodeError("Union or intersection has no members", path)

        types: list[TsNode] = []
        for i, member in enumerate(members):
            member_type = self.translate_type(member, f"{path}/{i}")
            comment = to_comment(member)
            if splice_enums and isinstance(member, EnumNode) and comment is None and isinstance(member_type, UnionType):
                types.extend(member_type.types)
                continue
            member_type = self._parenthesize(member_type)
            member_type.comment = comment
            types.append(member_type)
        return types

    def _translate_or(self, node: OrNode, path: str) -> TsNode:
        types = self._translate_members(node.members, f"{path}/or", splice_enums=True)
        merged = self._merge_string_literal_members(node.members, types, path)
        if merged is not None:
            types = merged
        return self._collapse(types) or UnionType(types=types)

    def _merge_string_literal_members(self, members: list[TypeNode], types: list[TsNode], path: str) -> list[TsNode] | None:
        """
        Merge a union of named string consts and string enums into one literal union.

        Runs on already-projected members: refs to string consts are replaced
        by their literal, enum literals are kept, duplicates are dropped.

        Returns:
            The merged literal members, or None when the union does not qualify
        """
        if not any(isinstance(member, RefNode) for member in members):
            return None
        if any(t.comment is not None for t in types):
            return None

        literals: list[str] = []
        for i, member in enumerate(members):
            match member:
                case RefNode():
                    target = self.resolver.resolve(member, f"{path}/or/{i}").node
                    if not (isinstance(target, ConstNode) and isinstance(target.value, str)):
                        return None
                    literals.append(target.value)
                case EnumNode() if all(isinstance(value, str) for value in member.values):
                    literals.extend(member.values)
                case ConstNode() if isinstance(member.value, str):
                    literals.append(member.value)
                case _:
                    return None

        return [LiteralType(value=value) for value in dict.fromkeys(literals)]
