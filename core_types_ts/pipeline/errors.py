"""
Errors raised while translating between core types and TypeScript.

Emission errors carry the path of the offending node within the document
(e.g. ``#/types/User/properties/name``). Parse errors carry the construct
and its 1-based source location.
"""

from __future__ import annotations


class CoreTypesError(Exception):
    """Base class for all translation errors."""

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(f"{message} (at {path})" if path else message)


class UnresolvedReferenceError(CoreTypesError):
    """A ``ref`` node names a type absent from the document."""


class DuplicateNameError(CoreTypesError):
    """Two named types in one document share a name."""


class UnsupportedNodeError(CoreTypesError):
    """A node kind or option combination the emitter cannot project."""


class MalformedLiteralError(CoreTypesError):
    """An ``enum`` or ``const`` with empty, mixed or non-literal values."""


class UnsupportedSyntaxError(CoreTypesError):
    """A TypeScript construct outside the supported subset.

    Attributes:
        construct: tree-sitter node type of the construct (e.g. ``function_declaration``)
        line: 1-based line of the construct
        column: 1-based column of the construct
    """

    def __init__(self, message: str, construct: str = "", line: int = 0, column: int = 0):
        self.construct = construct
        self.line = line
        self.column = column
        location = f"line {line}, column {column}" if line else None
        super().__init__(message, location)
