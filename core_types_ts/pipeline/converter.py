"""
Entry points of the translation in both directions.

Both directions are pure functions of their input: every call builds a
fresh backend or parser and returns a fresh result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ast_backends import TypeScriptAstBackend, TypeScriptSerializer
from .config import EmitOptions, ParseOptions, coerce_options
from .core_types import NodeDocument, document_from_dict
from .ts_parser import TypeScriptParser


@dataclass
class EmitResult:
    text: str = ""


@dataclass
class ParseResult:
    document: NodeDocument | None = None


@dataclass
class ConversionResult:
    """Result of a conversion; ``data`` is TypeScript text or a NodeDocument."""

    data: Any = None


def emit(document: NodeDocument, options: EmitOptions | dict | None = None) -> EmitResult:
    """Emit a document as TypeScript source."""
    backend = TypeScriptAstBackend(coerce_options(options, EmitOptions))
    file = backend.generate(document)
    return EmitResult(text=TypeScriptSerializer().serialize(file))


def parse(source: str, options: ParseOptions | dict | None = None) -> ParseResult:
    """Parse TypeScript source into a document."""
    parser = TypeScriptParser(coerce_options(options, ParseOptions))
    return ParseResult(document=parser.parse(source))


def convert_core_types_to_typescript(document: NodeDocument | dict, options: EmitOptions | dict | None = None) -> ConversionResult:
    """
    Convert a core types document to TypeScript.

    Args:
        document: The document, or its JSON form
        options: Emission options

    Returns:
        ConversionResult whose data is the TypeScript source
    """
    if isinstance(document, dict):
        document = document_from_dict(document)
    return ConversionResult(data=emit(document, options).text)


def convert_typescript_to_core_types(source: str, options: ParseOptions | dict | None = None) -> ConversionResult:
    """
    Convert TypeScript source to a core types document.

    Args:
        source: TypeScript source text
        options: Parse options

    Returns:
        ConversionResult whose data is the NodeDocument
    """
    return ConversionResult(data=parse(source, options).document)
