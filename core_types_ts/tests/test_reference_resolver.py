import pytest

from core_types_ts.pipeline import DuplicateNameError, UnresolvedReferenceError
from core_types_ts.pipeline.analyzer import ReferenceResolver
from core_types_ts.pipeline.core_types import (
    NamedType,
    NodeDocument,
    ObjectNode,
    OrNode,
    Property,
    RefNode,
    StringNode,
    TupleNode,
)


def make_document():
    return NodeDocument(
        types=[
            NamedType("Name", StringNode()),
            NamedType(
                "User",
                ObjectNode(
                    properties={"name": Property(node=RefNode(ref="Name"), required=True)},
                    additional_properties=OrNode(members=[RefNode(ref="User"), StringNode()]),
                ),
            ),
        ]
    )


class TestReferenceResolver:
    """Test cases for ReferenceResolver"""

    def test_resolve(self):
        resolver = ReferenceResolver(make_document())
        assert resolver.resolve(RefNode(ref="Name")).node == StringNode()
        assert resolver.identifier_for(RefNode(ref="User")) == "User"

    def test_ref_for(self):
        assert ReferenceResolver.ref_for("User") == RefNode(ref="User")

    def test_unresolved_reference(self):
        resolver = ReferenceResolver(make_document())
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolver.resolve(RefNode(ref="Missing"), "#/types/X")
        assert exc_info.value.path == "#/types/X"
        assert "Missing" in str(exc_info.value)

    def test_duplicate_names(self):
        document = NodeDocument(types=[NamedType("A", StringNode()), NamedType("A", StringNode())])
        with pytest.raises(DuplicateNameError) as exc_info:
            ReferenceResolver(document)
        assert exc_info.value.path == "#/types/A"

    def test_check_references_accepts_self_reference(self):
        ReferenceResolver(make_document()).check_references()

    def test_check_references_reports_nested_path(self):
        document = NodeDocument(
            types=[
                NamedType("Pair", TupleNode(element_types=[StringNode()], additional_items=RefNode(ref="Nope"))),
            ]
        )
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            ReferenceResolver(document).check_references()
        assert exc_info.value.path == "#/types/Pair/additionalItems"
