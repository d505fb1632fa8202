"""
Reference resolver for ``ref`` nodes.

Maps ref nodes to the named types of a document and back. All names live
in one TypeScript module, so a ref projects to the bare type name.
"""

from __future__ import annotations

from ..core_types.nodes import NamedType, NodeDocument, RefNode, walk
from ..errors import DuplicateNameError, UnresolvedReferenceError


class ReferenceResolver:
    """Resolves ref nodes to named types of one document."""

    def __init__(self, document: NodeDocument):
        """
        Initialize the resolver.

        Args:
            document: The document whose named types are the reference targets

        Raises:
            DuplicateNameError: If two named types share a name
        """
        self.document = document
        self._definition_cache: dict[str, NamedType] = {}
        self._build_cache()

    def _build_cache(self) -> None:
        """Build a cache of named types by name."""
        for named in self.document.types:
            if named.name in self._definition_cache:
                raise DuplicateNameError(f"Duplicate type name {named.name!r}", f"#/types/{named.name}")
            self._definition_cache[named.name] = named

    def resolve(self, ref_node: RefNode, path: str = "") -> NamedType:
        """
        Resolve a ref node to its target.

        Raises:
            UnresolvedReferenceError: If no named type has that name
        """
        named = self._definition_cache.get(ref_node.ref)
        if named is None:
            raise UnresolvedReferenceError(f"Reference to unknown type {ref_node.ref!r}", path)
        return named

    def identifier_for(self, ref_node: RefNode, path: str = "") -> str:
        """Get the TypeScript identifier a ref node projects to."""
        return self.resolve(ref_node, path).name

    @staticmethod
    def ref_for(identifier: str) -> RefNode:
        """Build the ref node for a TypeScript type identifier."""
        return RefNode(ref=identifier)

    def check_references(self) -> None:
        """Check that every ref node of the document resolves."""
        for named in self.document.types:
            for path, node in walk(named.node, f"#/types/{named.name}"):
                if isinstance(node, RefNode):
                    self.resolve(node, path)
