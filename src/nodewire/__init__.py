"""Nodewire: connect node properties and keep them in sync.

A small network of typed nodes, each exposing named properties, wired
together so that writing a value into one property propagates it to every
transitively connected property, including values derived from siblings
(e.g. a miles/km conversion).

Quick Start:
    from nodewire import NodeSystem, create_connector, create_input_node

    system = NodeSystem()
    a = system.add(create_input_node(name="a", value="hello"))
    b = system.add(create_input_node(name="b", value="world"))

    system.connect(
        to_connector=create_connector(a, "value"),
        from_connector=create_connector(b, "value"),
    )
    system.read(create_connector(b, "value"))  # "hello"

Node Kinds:
    - InputNode: a single ``value`` slot
    - DistanceConverterNode: ``miles`` / ``km`` slots derived from each other
"""

__version__ = "0.1.0"

# Configuration
from .config import Settings, settings

# Exceptions
from .exceptions import (
    ConfigurationError,
    InvalidPropertyError,
    NodewireError,
    PropagationLimitError,
    UnknownNodeError,
)

# Logging
from .logging import configure_logging, get_logger, logger, propagation_context

# Models
from .models import (
    MI_TO_KM,
    NAN_STRING,
    Connector,
    DistanceConverterNode,
    InputNode,
    Node,
    NodeKind,
    Property,
    create_connector,
    create_distance_converter_node,
    create_input_node,
)

# Propagation
from .propagation import PropagationConfig, PropagationResult

# System
from .system import NodeSystem

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    "settings",
    # Exceptions
    "NodewireError",
    "UnknownNodeError",
    "InvalidPropertyError",
    "PropagationLimitError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
    "logger",
    "propagation_context",
    # Models
    "Connector",
    "NodeKind",
    "Node",
    "InputNode",
    "DistanceConverterNode",
    "Property",
    "MI_TO_KM",
    "NAN_STRING",
    "create_connector",
    "create_input_node",
    "create_distance_converter_node",
    # Propagation
    "PropagationConfig",
    "PropagationResult",
    # System
    "NodeSystem",
]
