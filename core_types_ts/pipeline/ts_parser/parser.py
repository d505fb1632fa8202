"""
TypeScript parser that rebuilds core types.

Uses tree-sitter and tree-sitter-typescript to parse source text, then
walks the top-level type declarations and reconstructs the core type
nodes from their syntax. JSDoc blocks are matched to the construct that
follows them by source position.
"""

from __future__ import annotations

import json
import logging
import math
import re

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from ..analyzer.reference_resolver import ReferenceResolver
from ..annotations import from_comment
from ..config import NonExportedMode, ParseOptions
from ..core_types.nodes import (
    SCALAR_NODES,
    AndNode,
    Annotations,
    AnyNode,
    ConstNode,
    EnumNode,
    NamedType,
    NodeDocument,
    NodeKind,
    NullNode,
    ObjectNode,
    OrNode,
    Property,
    TupleNode,
    TypeNode,
    literal_kind,
)
from ..errors import UnsupportedSyntaxError

logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(ts_typescript.language_typescript())

DECLARATION_TYPES = ("type_alias_declaration", "interface_declaration")
TOP_TYPES = ("any", "unknown")
SCALAR_KEYWORDS = ("string", "number", "boolean")
INTEGER = re.compile(r"^\d+$")
RADIX_PREFIX = re.compile(r"^0[xXoObB]")
WHITESPACE = b" \t\r\n"


class TypeScriptParser:
    """Parses TypeScript type declarations into a core types document."""

    def __init__(self, options: ParseOptions | None = None):
        self.options = options or ParseOptions()
        self._parser = Parser(TS_LANGUAGE)
        self._source = b""
        self._comments: dict[int, str] = {}

    def parse(self, source: str) -> NodeDocument:
        """
        Parse TypeScript source into a document.

        Args:
            source: TypeScript source text

        Returns:
            A fresh NodeDocument with one named type per declaration

        Raises:
            UnsupportedSyntaxError: On syntax errors or constructs outside the supported subset
            DuplicateNameError: If a name is declared twice
            UnresolvedReferenceError: If a type refers to an undeclared name
        """
        self._source = source.encode("utf8")
        tree = self._parser.parse(self._source)
        root = tree.root_node

        if root.has_error:
            error = self._find_error(root) or root
            raise self._unsupported(error, f"Syntax error near {self._text(error)[:50]!r}")

        # JSDoc blocks keyed by the byte offset where they end
        self._comments = {}
        self._collect_comments(root)

        document = NodeDocument()
        for statement in self._named(root):
            document.types.append(self._parse_statement(statement))

        ReferenceResolver(document).check_references()
        return document

    def _find_error(self, node: Node) -> Node | None:
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            error = self._find_error(child)
            if error is not None:
                return error
        return None

    def _collect_comments(self, node: Node) -> None:
        if node.type == "comment":
            text = self._text(node)
            if text.startswith("/**"):
                self._comments[node.end_byte] = text
            return
        for child in node.children:
            self._collect_comments(child)

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf8")

    def _named(self, node: Node) -> list[Node]:
        """Named children, without comments."""
        return [child for child in node.named_children if child.type != "comment"]

    def _unsupported(self, node: Node, message: str) -> UnsupportedSyntaxError:
        row, column = node.start_point
        return UnsupportedSyntaxError(message, construct=node.type, line=row + 1, column=column + 1)

    def _leading_annotations(self, node: Node, operator: bytes = b"") -> Annotations:
        """
        Find the JSDoc block attached to a node.

        A block is attached when only whitespace with at most one line break
        separates it from the node, optionally around the node's union or
        intersection operator.
        """
        source = self._source
        position = node.start_byte
        newlines = 0

        def skip_whitespace(i: int) -> int:
            nonlocal newlines
            while i > 0 and source[i - 1] in WHITESPACE:
                newlines += source[i - 1] == ord("\n")
                i -= 1
            return i

        position = skip_whitespace(position)
        if operator and position > 0 and source[position - 1] in operator:
            position = skip_whitespace(position - 1)

        if newlines > 1:
            return Annotations()
        return from_comment(self._comments.get(position))

    def _parse_statement(self, statement: Node) -> NamedType:
        declaration = statement
        exported = statement.type == "export_statement"
        if exported:
            declaration = statement.child_by_field_name("declaration")
            if declaration is None:
                raise self._unsupported(statement, "Only type declarations can be exported")

        if declaration.type not in DECLARATION_TYPES:
            raise self._unsupported(declaration, f"Unsupported top-level construct {declaration.type}")

        name = self._text(declaration.child_by_field_name("name"))
        if not exported and self.options.non_exported == NonExportedMode.FAIL:
            raise self._unsupported(declaration, f"Type {name!r} is not exported")
        if declaration.child_by_field_name("type_parameters") is not None:
            raise self._unsupported(declaration, f"Generic type {name!r} is not supported")

        if declaration.type == "interface_declaration":
            for child in self._named(declaration):
                if child.type in ("extends_type_clause", "extends_clause"):
                    raise self._unsupported(child, f"Interface {name!r} cannot extend other types")
            node = self._parse_members(declaration.child_by_field_name("body"))
        else:
            node = self._parse_type(declaration.child_by_field_name("value"))

        annotations = self._leading_annotations(statement)
        if not annotations.is_empty():
            node.set_annotations(annotations)

        logger.debug("Parsed type declaration %s (%s)", name, node.kind.value)
        return NamedType(name=name, node=node)

    def _parse_type(self, node: Node) -> TypeNode:
        """Rebuild the core type node for a type syntax node."""
        node_type = node.type

        if node_type == "predefined_type":
            keyword = self._text(node)
            if keyword in SCALAR_KEYWORDS or keyword == "null":
                return SCALAR_NODES[NodeKind(keyword)]()
            if keyword in TOP_TYPES:
                return AnyNode()
            raise self._unsupported(node, f"Unsupported type keyword {keyword!r}")

        if node_type == "literal_type":
            kind, value = self._literal_value(node)
            return NullNode() if kind == NodeKind.NULL else ConstNode(value=value)

        if node_type == "type_identifier":
            return ReferenceResolver.ref_for(self._text(node))

        if node_type == "object_type":
            return self._parse_members(node)

        if node_type == "tuple_type":
            return self._parse_tuple(node)

        if node_type in ("union_type", "intersection_type"):
            return self._parse_compound(node)

        if node_type == "parenthesized_type":
            return self._parse_type(self._named(node)[0])

        if node_type == "array_type":
            raise self._unsupported(node, "Array types are only supported as a tuple rest element")

        raise self._unsupported(node, f"Unsupported type syntax {node_type}")

    def _literal_value(self, node: Node) -> tuple[NodeKind, object]:
        """Read the value of a literal_type node."""
        child = self._named(node)[0]
        text = self._text(child)

        if child.type == "string":
            value: object = self._string_value(text)
        elif child.type in ("number", "unary_expression"):
            value = self._number_value(child, text)
        elif child.type in ("true", "false"):
            value = child.type == "true"
        elif child.type == "null":
            value = None
        else:
            raise self._unsupported(child, f"Unsupported literal {text!r}")

        return literal_kind(value), value

    def _number_value(self, node: Node, text: str) -> int | float:
        """Read a numeric literal, with an optional leading minus sign."""
        text = text.replace(" ", "")
        digits = text.removeprefix("-")
        sign = -1 if digits != text else 1

        if digits.endswith("n"):
            raise self._unsupported(node, f"BigInt literal {text!r} is not supported")
        try:
            if INTEGER.match(digits):
                value: int | float = int(digits)
            elif RADIX_PREFIX.match(digits):
                value = int(digits, 0)
            else:
                value = float(digits)
        except ValueError:
            raise self._unsupported(node, f"Unsupported number literal {text!r}") from None

        if not math.isfinite(value):
            raise self._unsupported(node, f"Number literal {text!r} is out of range")
        return sign * value

    def _string_value(self, text: str) -> str:
        if text.startswith('"'):
            return json.loads(text)
        inner = text[1:-1].replace("\\'", "'").replace('"', '\\"')
        return json.loads(f'"{inner}"')

    def _property_name(self, node: Node) -> str:
        if node.type in ("property_identifier", "number"):
            return self._text(node)
        if node.type == "string":
            return self._string_value(self._text(node))
        raise self._unsupported(node, f"Unsupported property name {self._text(node)!r}")

    def _with_annotations(self, node: TypeNode, annotations: Annotations) -> TypeNode:
        if not annotations.is_empty():
            node.set_annotations(annotations)
        return node

    def _is_top_type(self, node: Node) -> bool:
        return node.type == "predefined_type" and self._text(node) in TOP_TYPES

    def _parse_members(self, node: Node) -> ObjectNode:
        """Rebuild an object node from a type literal or interface body."""
        object_node = ObjectNode()

        for member in self._named(node):
            if member.type == "property_signature":
                name = self._property_name(member.child_by_field_name("name"))
                for child in member.children:
                    if child.type in ("readonly", "accessibility_modifier", "override_modifier", "static"):
                        raise self._unsupported(child, f"Modifier {self._text(child)!r} on property {name!r} is not supported")
                type_annotation = member.child_by_field_name("type")
                if type_annotation is None:
                    raise self._unsupported(member, f"Property {name!r} has no type")
                if name in object_node.properties:
                    raise self._unsupported(member, f"Duplicate property {name!r}")

                prop_node = self._parse_type(self._named(type_annotation)[0])
                optional = any(child.type == "?" for child in member.children)
                object_node.properties[name] = Property(
                    node=self._with_annotations(prop_node, self._leading_annotations(member)),
                    required=not optional,
                )

            elif member.type == "index_signature":
                if object_node.additional_properties is not False:
                    raise self._unsupported(member, "Only one index signature is supported")
                object_node.additional_properties = self._parse_index_signature(member)

            else:
                raise self._unsupported(member, f"Unsupported object member {member.type}")

        return object_node

    def _parse_index_signature(self, node: Node) -> bool | TypeNode:
        key_type = None
        value_type = None
        for child in node.children:
            if child.type in ("readonly", "mapped_type_clause"):
                raise self._unsupported(child, "Only `[key: string]: T` index signatures are supported")
            if not child.is_named or child.type in ("identifier", "comment"):
                continue
            if child.type == "type_annotation":
                value_type = self._named(child)[0]
            else:
                key_type = child

        if key_type is None or self._text(key_type) != "string" or value_type is None:
            raise self._unsupported(node, "Only `[key: string]: T` index signatures are supported")

        annotations = self._leading_annotations(node)
        if self._is_top_type(value_type) and annotations.is_empty():
            return True
        return self._with_annotations(self._parse_type(value_type), annotations)

    def _parse_tuple(self, node: Node) -> TupleNode:
        tuple_node = TupleNode()
        elements = self._named(node)
        seen_optional = False

        for i, element in enumerate(elements):
            annotations = self._leading_annotations(element)

            if element.type == "rest_type":
                if i != len(elements) - 1:
                    raise self._unsupported(element, "A rest element must be the last tuple element")
                array = self._named(element)[0]
                if array.type != "array_type":
                    raise self._unsupported(array, "A rest element must be an array type")
                item = self._named(array)[0]
                if self._is_top_type(item) and annotations.is_empty():
                    tuple_node.additional_items = True
                else:
                    tuple_node.additional_items = self._with_annotations(self._parse_type(item), annotations)
                continue

            if element.type == "optional_type":
                seen_optional = True
                element_node = self._parse_type(self._named(element)[0])
            elif element.type in ("required_parameter", "optional_parameter"):
                raise self._unsupported(element, "Labeled tuple elements are not supported")
            else:
                if seen_optional:
                    raise self._unsupported(element, "A required tuple element cannot follow an optional one")
                element_node = self._parse_type(element)
                tuple_node.min_items += 1

            tuple_node.element_types.append(self._with_annotations(element_node, annotations))

        return tuple_node

    def _flatten(self, node: Node) -> list[Node]:
        """Collect the operands of a chain of the same binary type operator."""
        operands = []
        for child in self._named(node):
            if child.type == node.type:
                operands.extend(self._flatten(child))
            else:
                operands.append(child)
        return operands

    def _parse_compound(self, node: Node) -> TypeNode:
        is_union = node.type == "union_type"
        operator = b"|" if is_union else b"&"
        operands = [(operand, self._leading_annotations(operand, operator)) for operand in self._flatten(node)]

        if is_union and len(operands) > 1 and all(operand.type == "literal_type" and annotations.is_empty() for operand, annotations in operands):
            literals = [self._literal_value(operand) for operand, _ in operands]
            kinds = {kind for kind, _ in literals}
            if len(kinds) == 1 and NodeKind.NULL not in kinds:
                return EnumNode(values=[value for _, value in literals])

        members = [self._with_annotations(self._parse_type(operand), annotations) for operand, annotations in operands]
        return OrNode(members=members) if is_union else AndNode(members=members)
