"""
Analyzer module.

Contains reference resolution over core type documents.
"""

from __future__ import annotations

from .reference_resolver import ReferenceResolver

__all__ = [
    "ReferenceResolver",
]
