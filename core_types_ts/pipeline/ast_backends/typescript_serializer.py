"""
TypeScript AST Serializer.

Converts TypeScript AST nodes to source code:
- 4-space indentation
- One object member per line, terminated by `;`
- Blank line between declarations
- Unions, intersections and tuples with documented members are laid out
  one member per line, each preceded by its JSDoc block
"""

from __future__ import annotations

import json
import re
from typing import Any

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

IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class TypeScriptSerializer:
    """Serializes TypeScript AST nodes to source code."""

    INDENT = "    "  # 4 spaces

    def serialize(self, file: TsFile) -> str:
        """Serialize a complete TypeScript file to source code."""
        blocks: list[str] = []

        if file.header:
            blocks.append(file.header)

        if file.expression is not None:
            lines = self._comment_lines(file.expression, 0)
            lines.append(self._serialize_type(file.expression, 0).lstrip("\n"))
            blocks.append("\n".join(lines))

        for declaration in file.declarations:
            blocks.append(self._serialize_declaration(declaration))

        return "\n\n".join(blocks) + "\n"

    def _serialize_declaration(self, declaration: TypeAliasDeclaration) -> str:
        lines = self._comment_lines(declaration, 0)
        value = self._serialize_type(declaration.type, 0)
        lines.append(f"export type {declaration.name} ={self._spaced(value)};")
        return "\n".join(lines)

    def _comment_lines(self, node: TsNode, level: int) -> list[str]:
        if node.comment is None:
            return []
        return node.comment.render(self.INDENT * level)

    def _spaced(self, text: str) -> str:
        """Join a type after `=` or `:`; multi-line unions start on the next line."""
        return text if text.startswith("\n") else f" {text}"

    def _serialize_type(self, node: TsNode, level: int) -> str:
        """Serialize a type; continuation lines are indented for ``level``."""
        match node:
            case KeywordType():
                return node.keyword
            case LiteralType():
                return self._serialize_literal(node.value)
            case TypeReference():
                return node.name
            case TypeLiteral():
                return self._serialize_type_literal(node, level)
            case TupleType():
                return self._serialize_tuple(node, level)
            case UnionType():
                return self._serialize_compound(node.types, "|", level)
            case IntersectionType():
                return self._serialize_compound(node.types, "&", level)
            case ArrayType():
                return f"{self._serialize_type(node.element, level)}[]"
            case ParenthesizedType():
                return f"({self._serialize_type(node.type, level)})"
            case _:
                raise TypeError(f"Cannot serialize {type(node).__name__}")

    def _serialize_literal(self, value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return json.dumps(value, ensure_ascii=False)
        if isinstance(value, float):
            return repr(value)
        return str(value)

    def _serialize_property_name(self, name: str) -> str:
        return name if IDENTIFIER.match(name) else json.dumps(name, ensure_ascii=False)

    def _serialize_type_literal(self, node: TypeLiteral, level: int) -> str:
        if not node.members:
            return "{}"

        indent = self.INDENT * (level + 1)
        lines = ["{"]
        for member in node.members:
            lines.extend(self._comment_lines(member, level + 1))
            value = self._spaced(self._serialize_type(member.type, level + 1))
            if isinstance(member, PropertySignature):
                optional = "?" if member.optional else ""
                lines.append(f"{indent}{self._serialize_property_name(member.name)}{optional}:{value};")
            elif isinstance(member, IndexSignature):
                lines.append(f"{indent}[{member.key_name}: string]:{value};")
        lines.append(f"{self.INDENT * level}}}")
        return "\n".join(lines)

    def _serialize_tuple_member(self, member: TupleMember, level: int) -> str:
        text = self._serialize_type(member.type, level)
        if member.rest:
            return f"...{text}"
        if member.optional:
            return f"{text}?"
        return text

    def _serialize_tuple(self, node: TupleType, level: int) -> str:
        if not any(element.comment for element in node.elements):
            return "[" + ", ".join(self._serialize_tuple_member(e, level) for e in node.elements) + "]"

        indent = self.INDENT * (level + 1)
        lines = ["["]
        for i, element in enumerate(node.elements):
            lines.extend(self._comment_lines(element, level + 1))
            comma = "," if i < len(node.elements) - 1 else ""
            lines.append(f"{indent}{self._serialize_tuple_member(element, level + 1)}{comma}")
        lines.append(f"{self.INDENT * level}]")
        return "\n".join(lines)

    def _serialize_compound(self, types: list[TsNode], operator: str, level: int) -> str:
        if not any(t.comment for t in types):
            return f" {operator} ".join(self._serialize_type(t, level) for t in types)

        indent = self.INDENT * (level + 1)
        lines: list[str] = []
        for t in types:
            lines.extend(self._comment_lines(t, level + 1))
            lines.append(f"{indent}{operator} {self._serialize_type(t, level + 1)}")
        return "\n" + "\n".join(lines)
