"""
Base class for AST-based code generation backends.

Defines the interface that a language-specific AST backend implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..config import EmitOptions
from ..core_types.nodes import NodeDocument, TypeNode


class AstBackend(ABC):
    """Abstract base class for AST-based code generation backends."""

    # Type mapping from scalar core types to language types
    TYPE_MAP: dict[str, str] = {}

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, options: EmitOptions):
        """
        Initialize the backend.

        Args:
            options: Emission options
        """
        self.options = options

    @abstractmethod
    def generate(self, document: NodeDocument) -> Any:
        """
        Generate a language AST from a document.

        Args:
            document: The core types document

        Returns:
            The root node of the language AST
        """

    @abstractmethod
    def translate_type(self, node: TypeNode, path: str) -> Any:
        """
        Translate a core type node to a language AST type node.

        Args:
            node: The type node
            path: Path of the node within the document

        Returns:
            Language AST type node
        """
