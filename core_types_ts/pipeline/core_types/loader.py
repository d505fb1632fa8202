"""
Conversion between core type nodes and their JSON form.

The JSON form is the one used by core-types documents on disk:
``{"version": 1, "types": [{"name": "User", "type": "object", ...}]}``.
Enums and consts are written as a scalar ``type`` carrying an ``enum`` or
``const`` key.
"""

from __future__ import annotations

from typing import Any

from ..errors import UnsupportedNodeError
from .nodes import (
    SCALAR_NODES,
    AndNode,
    AnyNode,
    Annotations,
    ConstNode,
    EnumNode,
    NamedType,
    NodeDocument,
    NodeKind,
    ObjectNode,
    OrNode,
    Property,
    RefNode,
    TupleNode,
    TypeNode,
    enum_kind,
    literal_kind,
)

ANNOTATION_KEYS = ("title", "description", "examples", "default", "see")


def document_from_dict(data: dict[str, Any]) -> NodeDocument:
    """Build a NodeDocument from its JSON form."""
    document = NodeDocument(version=data.get("version", 1))
    for i, entry in enumerate(data.get("types", [])):
        name = entry.get("name")
        if not name:
            raise UnsupportedNodeError("Named type has no name", f"#/types/{i}")
        document.types.append(NamedType(name=name, node=node_from_dict(entry, f"#/types/{name}")))
    return document


def document_to_dict(document: NodeDocument) -> dict[str, Any]:
    """Convert a NodeDocument to its JSON form."""
    return {
        "version": document.version,
        "types": [{"name": named.name, **node_to_dict(named.node)} for named in document.types],
    }


def _annotations_from_dict(data: dict[str, Any]) -> Annotations:
    def as_list(value: Any) -> list[str] | None:
        if value is None:
            return None
        return [value] if isinstance(value, str) else list(value)

    return Annotations(
        title=data.get("title"),
        description=data.get("description"),
        examples=as_list(data.get("examples")),
        default=data.get("default"),
        see=as_list(data.get("see")),
    )


def _additional_from_dict(value: Any, path: str) -> bool | TypeNode:
    if value is None or isinstance(value, bool):
        return bool(value)
    return node_from_dict(value, path)


def node_from_dict(data: dict[str, Any], path: str) -> TypeNode:
    """
    Parse one node from its JSON form.

    Args:
        data: The JSON object describing the node
        path: Path of the node within the document (for error messages)

    Returns:
        The matching TypeNode subclass
    """
    type_name = data.get("type")

    if "enum" in data:
        node: TypeNode = EnumNode(values=list(data["enum"]))
    elif "const" in data:
        node = ConstNode(value=data["const"])
    elif type_name in [kind.value for kind in SCALAR_NODES]:
        node = SCALAR_NODES[NodeKind(type_name)]()
    elif type_name == "any":
        node = AnyNode()
    elif type_name == "ref":
        node = RefNode(ref=data.get("ref", ""))
    elif type_name in ("or", "and"):
        members = [node_from_dict(member, f"{path}/{type_name}/{i}") for i, member in enumerate(data.get(type_name, []))]
        node = OrNode(members=members) if type_name == "or" else AndNode(members=members)
    elif type_name == "object":
        properties = {}
        for name, prop in data.get("properties", {}).items():
            prop_node = node_from_dict(prop.get("node", {}), f"{path}/properties/{name}")
            properties[name] = Property(node=prop_node, required=bool(prop.get("required", False)))
        node = ObjectNode(
            properties=properties,
            additional_properties=_additional_from_dict(data.get("additionalProperties"), f"{path}/additionalProperties"),
        )
    elif type_name == "tuple":
        node = TupleNode(
            element_types=[node_from_dict(element, f"{path}/elementTypes/{i}") for i, element in enumerate(data.get("elementTypes", []))],
            min_items=data.get("minItems", 0),
            additional_items=_additional_from_dict(data.get("additionalItems"), f"{path}/additionalItems"),
        )
    else:
        raise UnsupportedNodeError(f"Unsupported node type {type_name!r}", path)

    node.set_annotations(_annotations_from_dict(data))
    return node


def _additional_to_dict(value: bool | TypeNode) -> bool | dict[str, Any]:
    return node_to_dict(value) if isinstance(value, TypeNode) else value


def node_to_dict(node: TypeNode) -> dict[str, Any]:
    """Convert one node to its JSON form."""
    match node:
        case EnumNode():
            data: dict[str, Any] = {"type": enum_kind(node).value, "enum": list(node.values)}
        case ConstNode():
            data = {"type": literal_kind(node.value).value, "const": node.value}
        case RefNode():
            data = {"type": "ref", "ref": node.ref}
        case OrNode() | AndNode():
            data = {"type": node.kind.value, node.kind.value: [node_to_dict(member) for member in node.members]}
        case ObjectNode():
            data = {
                "type": "object",
                "properties": {name: {"node": node_to_dict(prop.node), "required": prop.required} for name, prop in node.properties.items()},
                "additionalProperties": _additional_to_dict(node.additional_properties),
            }
        case TupleNode():
            data = {
                "type": "tuple",
                "elementTypes": [node_to_dict(element) for element in node.element_types],
                "minItems": node.min_items,
                "additionalItems": _additional_to_dict(node.additional_items),
            }
        case _:
            data = {"type": node.kind.value}

    for key in ANNOTATION_KEYS:
        value = getattr(node, key)
        if value:
            data[key] = value
    return data
