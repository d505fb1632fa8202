"""
Pipeline - AST-based translation between core types and TypeScript.

Forward direction:
1. Phase 1 (Analyzer): Resolve references of the core types document
2. Phase 2 (AST Backend): Generate a TypeScript AST from the core types
3. Phase 3 (Serializer): Convert the AST to source code

Reverse direction:
1. Phase 1 (tree-sitter): Parse TypeScript source into a syntax tree
2. Phase 2 (Parser): Rebuild core types from type declarations and JSDoc
3. Phase 3 (Analyzer): Check names and references of the new document
"""

from __future__ import annotations

from .config import EmitOptions, NonExportedMode, ParseOptions
from .converter import (
    ConversionResult,
    EmitResult,
    ParseResult,
    convert_core_types_to_typescript,
    convert_typescript_to_core_types,
    emit,
    parse,
)
from .errors import (
    CoreTypesError,
    DuplicateNameError,
    MalformedLiteralError,
    UnresolvedReferenceError,
    UnsupportedNodeError,
    UnsupportedSyntaxError,
)

__all__ = [
    "EmitOptions",
    "ParseOptions",
    "NonExportedMode",
    "ConversionResult",
    "EmitResult",
    "ParseResult",
    "emit",
    "parse",
    "convert_core_types_to_typescript",
    "convert_typescript_to_core_types",
    "CoreTypesError",
    "DuplicateNameError",
    "MalformedLiteralError",
    "UnresolvedReferenceError",
    "UnsupportedNodeError",
    "UnsupportedSyntaxError",
]
