"""core-types-ts

A Python package translating core types documents (a language-neutral
type description) to TypeScript type declarations and back, with
documentation preserved as JSDoc.
"""

__version__ = "1.0.0"

from .pipeline import (
    ConversionResult,
    CoreTypesError,
    DuplicateNameError,
    EmitOptions,
    MalformedLiteralError,
    NonExportedMode,
    ParseOptions,
    UnresolvedReferenceError,
    UnsupportedNodeError,
    UnsupportedSyntaxError,
    convert_core_types_to_typescript,
    convert_typescript_to_core_types,
)

__all__ = [
    "convert_core_types_to_typescript",
    "convert_typescript_to_core_types",
    "ConversionResult",
    "EmitOptions",
    "ParseOptions",
    "NonExportedMode",
    "CoreTypesError",
    "DuplicateNameError",
    "MalformedLiteralError",
    "UnresolvedReferenceError",
    "UnsupportedNodeError",
    "UnsupportedSyntaxError",
]
