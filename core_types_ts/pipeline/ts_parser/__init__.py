"""
TypeScript parser module.

Rebuilds core type documents from TypeScript source.
"""

from __future__ import annotations

from .parser import TypeScriptParser

__all__ = [
    "TypeScriptParser",
]
