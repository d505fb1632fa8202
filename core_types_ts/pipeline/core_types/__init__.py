"""
Core types module.

Contains the type node definitions and their JSON form.
"""

from __future__ import annotations

from .loader import document_from_dict, document_to_dict, node_from_dict, node_to_dict
from .nodes import (
    AndNode,
    Annotations,
    AnyNode,
    BooleanNode,
    ConstNode,
    EnumNode,
    NamedType,
    NodeDocument,
    NodeKind,
    NullNode,
    NumberNode,
    ObjectNode,
    OrNode,
    Property,
    RefNode,
    StringNode,
    TupleNode,
    TypeNode,
    walk,
)

__all__ = [
    "TypeNode",
    "NodeKind",
    "Annotations",
    "StringNode",
    "NumberNode",
    "BooleanNode",
    "NullNode",
    "AnyNode",
    "ObjectNode",
    "Property",
    "TupleNode",
    "OrNode",
    "AndNode",
    "RefNode",
    "EnumNode",
    "ConstNode",
    "NamedType",
    "NodeDocument",
    "walk",
    "document_from_dict",
    "document_to_dict",
    "node_from_dict",
    "node_to_dict",
]
