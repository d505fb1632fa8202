#!/usr/bin/env python3
"""
Round-trip tests between core types and TypeScript.

Emitting a parsed emission reproduces the first emission byte for byte,
and the reference TypeScript files parse back to their source documents.
"""

import json
from pathlib import Path

import pytest

from core_types_ts.pipeline import EmitOptions, emit, parse
from core_types_ts.pipeline.core_types import (
    AndNode,
    AnyNode,
    BooleanNode,
    ConstNode,
    EnumNode,
    NamedType,
    NodeDocument,
    NullNode,
    NumberNode,
    ObjectNode,
    OrNode,
    Property,
    RefNode,
    StringNode,
    TupleNode,
    document_from_dict,
)

TEST_DATA = Path(__file__).parent / "test_data"

REFERENCE_CASES = [
    ("readme", EmitOptions()),
    ("annotations", EmitOptions(no_descriptive_header=True)),
    ("complex", EmitOptions(use_unknown=True, no_descriptive_header=True)),
]


def load_document(name: str) -> NodeDocument:
    with open(TEST_DATA / f"{name}.json") as f:
        return document_from_dict(json.load(f))


def roundtrip(document: NodeDocument, options: EmitOptions) -> tuple[str, str]:
    first = emit(document, options).text
    second = emit(parse(first).document, options).text
    return first, second


DOCUMENTS = {
    "scalars": NodeDocument(
        types=[
            NamedType("S", StringNode()),
            NamedType("N", NumberNode(title="A number")),
            NamedType("B", BooleanNode()),
            NamedType("Z", NullNode()),
            NamedType("A", AnyNode()),
        ]
    ),
    "literals": NodeDocument(
        types=[
            NamedType("Color", EnumNode(values=["red", "green"], description="Primary colors")),
            NamedType("Level", EnumNode(values=[1, 2, 3])),
            NamedType("Yes", ConstNode(value=True)),
            NamedType("Quote", ConstNode(value='say "hi"')),
        ]
    ),
    "flattened_union": NodeDocument(
        types=[
            NamedType("bar", ConstNode(value="bar")),
            NamedType("foo", OrNode(members=[RefNode(ref="bar"), EnumNode(values=["foo", "baz"])])),
        ]
    ),
    "nested_compounds": NodeDocument(
        types=[
            NamedType("A", ObjectNode(properties={"a": Property(node=StringNode(), required=True)})),
            NamedType("B", ObjectNode(additional_properties=NumberNode(title="Counts"))),
            NamedType(
                "C",
                OrNode(
                    members=[
                        AndNode(members=[RefNode(ref="A"), RefNode(ref="B")]),
                        NullNode(title="Nothing"),
                        EnumNode(values=["x", "y"]),
                    ]
                ),
            ),
        ]
    ),
    "tuples": NodeDocument(
        types=[
            NamedType(
                "T",
                TupleNode(
                    element_types=[StringNode(title="First"), OrNode(members=[NumberNode(), NullNode()])],
                    min_items=1,
                    additional_items=True,
                ),
            ),
            NamedType("Closed", TupleNode(element_types=[BooleanNode()], min_items=1)),
        ]
    ),
    "documented_members": NodeDocument(
        types=[
            NamedType(
                "Shape",
                ObjectNode(
                    title="A shape",
                    properties={
                        "kind": Property(
                            node=OrNode(
                                members=[
                                    ConstNode(value="circle", title="Round"),
                                    ConstNode(value="square", examples=["square"], see=["http://shapes"]),
                                ]
                            ),
                            required=True,
                        ),
                        "size-in-cm": Property(node=NumberNode(default="1"), required=False),
                    },
                ),
            )
        ]
    ),
}


@pytest.mark.parametrize("name,options", REFERENCE_CASES, ids=[case[0] for case in REFERENCE_CASES])
def test_reference_files_roundtrip(name, options):
    """Reference files re-emit byte for byte"""
    first, second = roundtrip(load_document(name), options)
    assert first == second


@pytest.mark.parametrize("name,options", REFERENCE_CASES, ids=[case[0] for case in REFERENCE_CASES])
def test_reference_files_parse_to_source_document(name, options):
    """Reference files parse back to the documents they were emitted from"""
    with open(TEST_DATA / f"{name}.ts") as f:
        source = f.read()
    assert parse(source).document == load_document(name)


@pytest.mark.parametrize("name", list(DOCUMENTS))
@pytest.mark.parametrize("use_unknown", [False, True])
def test_emit_parse_emit(name, use_unknown):
    options = EmitOptions(use_unknown=use_unknown)
    first, second = roundtrip(DOCUMENTS[name], options)
    assert first == second


def test_parsed_document_is_fresh():
    document = DOCUMENTS["scalars"]
    text = emit(document, EmitOptions()).text
    assert parse(text).document is not parse(text).document


@pytest.mark.parametrize(
    "annotations",
    [
        {"description": "@note this is prose"},
        {"title": "*starred"},
        {"title": "trailing "},
        {"title": " leading"},
        {"title": "Title", "description": "@param is not a tag here\n *indented star"},
        {"examples": ["{\n  @decorated: true\n}"]},
    ],
)
def test_annotation_text_survives(annotations):
    document = NodeDocument(
        types=[
            NamedType("X", StringNode(**annotations)),
            NamedType("Y", ObjectNode(properties={"y": Property(node=NumberNode(**annotations), required=True)})),
        ]
    )
    first, second = roundtrip(document, EmitOptions(no_descriptive_header=True))
    assert "/**" in second
    assert first == second


def test_non_exported_declarations_are_emitted_exported():
    document = parse("type foo = string;\n").document
    assert emit(document, EmitOptions(no_descriptive_header=True)).text == "export type foo = string;\n"
