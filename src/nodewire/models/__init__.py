"""Node and connector models for Nodewire.

Node Kinds:
    - InputNode: a single ``value`` slot holding arbitrary text
    - DistanceConverterNode: mutually derived ``miles`` / ``km`` slots

Supporting Types:
    - Connector: addresses one property of one node
    - Property: get/set capability record, setters report ripples
    - Numeric: Valid | Invalid state of derived numeric slots
"""

from .base import (
    Connector,
    NodeKind,
    create_connector,
    generate_id,
    get_node_id,
    get_path,
    get_property,
)
from .nodes import (
    MI_TO_KM,
    AnyNode,
    DistanceConverterNode,
    DummyInputNode,
    InputNode,
    Node,
    Property,
    Ripple,
    create_distance_converter_node,
    create_dummy_node,
    create_input_node,
)
from .numeric import (
    INVALID,
    NAN_STRING,
    Invalid,
    Numeric,
    Valid,
    format_number,
    parse_float_prefix,
    parse_numeric,
    render,
)

__all__ = [
    # Base types
    "Connector",
    "NodeKind",
    "create_connector",
    "generate_id",
    "get_node_id",
    "get_path",
    "get_property",
    # Nodes
    "AnyNode",
    "DistanceConverterNode",
    "DummyInputNode",
    "InputNode",
    "Node",
    "Property",
    "Ripple",
    "create_distance_converter_node",
    "create_dummy_node",
    "create_input_node",
    # Numeric
    "INVALID",
    "Invalid",
    "MI_TO_KM",
    "NAN_STRING",
    "Numeric",
    "Valid",
    "format_number",
    "parse_float_prefix",
    "parse_numeric",
    "render",
]
