"""
AST backends module.

Contains the TypeScript AST nodes, the backend building them from core
types, and the serializer printing them.
"""

from __future__ import annotations

from .typescript_ast_backend import TypeScriptAstBackend
from .typescript_serializer import TypeScriptSerializer

__all__ = [
    "TypeScriptAstBackend",
    "TypeScriptSerializer",
]
