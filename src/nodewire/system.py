"""Node system: registry, connections and propagation behind one facade.

Example:
    ```python
    from nodewire import NodeSystem, create_connector, create_input_node
    from nodewire.models import create_distance_converter_node

    system = NodeSystem()
    miles_id = system.add(create_input_node(name="miles", value="10"))
    conv_id = system.add(create_distance_converter_node(name="converter"))

    # The converter's miles adopts the input's value, km is derived
    system.connect(
        to_connector=create_connector(miles_id, "value"),
        from_connector=create_connector(conv_id, "miles"),
    )
    system.read(create_connector(conv_id, "km"))  # "16.0934"
    ```
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from nodewire.exceptions import UnknownNodeError
from nodewire.graph import ConnectionGraph
from nodewire.logging import get_logger
from nodewire.models import Connector, Node, Property, create_dummy_node
from nodewire.propagation import PropagationConfig, PropagationResult, propagate

logger = get_logger(__name__)


class NodeSystem:
    """Owns the nodes of one system and the connections between their properties.

    All operations are synchronous and run to completion; callers serialize
    their own access. Nodes are owned exclusively by the system once added.

    Args:
        config: Propagation bounds. Built from the global settings if None.
    """

    def __init__(self, config: PropagationConfig | None = None) -> None:
        self.config = config or PropagationConfig.from_settings()
        self._nodes: dict[str, Node] = {}
        self._graph = ConnectionGraph()
        self._dummy = create_dummy_node()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def add(self, node: Node) -> str:
        """Register a node. Returns its id."""
        self._nodes[node.id] = node
        logger.debug("Node added", node_id=node.id, name=node.name, kind=node.kind.value)
        return node.id

    def remove(self, node_id: str) -> bool:
        """Remove a node together with every connection touching its properties.

        Returns:
            True if the node was registered, False otherwise.
        """
        node = self._nodes.pop(node_id, None)
        if node is None:
            return False
        dropped = self._graph.remove_node(node_id)
        logger.debug("Node removed", node_id=node_id, adjacency_entries_dropped=dropped)
        return True

    def get_node(self, node_id: str) -> Node:
        """The registered node, or the fallback dummy input node for unknown ids."""
        return self._nodes.get(node_id, self._dummy)

    def get_nodes(self) -> Mapping[str, Node]:
        """Read-only view of the registry."""
        return MappingProxyType(self._nodes)

    def get_conns(self) -> Mapping[str, tuple[Connector, ...]]:
        """Read-only snapshot of the adjacency, keyed by connector path."""
        return self._graph.as_mapping()

    def resolve(self, connector: Connector) -> Property:
        """Property addressed by ``connector``.

        Raises:
            UnknownNodeError: If the node is not registered.
            InvalidPropertyError: If the node has no such property.
        """
        node = self._nodes.get(connector.node_id)
        if node is None:
            raise UnknownNodeError(connector.node_id, self._nodes)
        return node.get_property(connector.prop_name)

    def read(self, connector: Connector) -> str:
        """Current value of the property addressed by ``connector``."""
        return self.resolve(connector).get()

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def connect(self, *, to_connector: Connector, from_connector: Connector) -> PropagationResult:
        """Connect two properties and synchronize them.

        Everything connected to ``to_connector`` (now including
        ``from_connector``) adopts ``to_connector``'s current value;
        ``to_connector`` itself is not rewritten.

        Raises:
            UnknownNodeError: If either node id is not registered.
            InvalidPropertyError: If either property does not exist.
        """
        try:
            to_property = self.resolve(to_connector)
            self.resolve(from_connector)
        except UnknownNodeError as e:
            logger.warning("Connect rejected", node_id=e.node_id, registered=len(self._nodes))
            raise

        self._graph.add_connection(to_connector, from_connector)
        logger.debug("Connected", to=to_connector.path, source=from_connector.path)

        return self.update(to_connector, to_property.get(), update_origin=False)

    def disconnect(self, first: Connector, second: Connector) -> bool:
        """Remove the connection between two properties in both directions.

        Returns:
            True if a connection was removed.
        """
        removed = self._graph.remove_connection(first, second)
        logger.debug("Disconnected", first=first.path, second=second.path, removed=removed)
        return removed

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------

    def get_update_list(self, visited: Iterable[Connector], origin: Connector) -> list[Connector]:
        """Connectors reachable from ``origin``, excluding anything in ``visited``."""
        return self._graph.reachable(visited, origin)

    def update(
        self,
        origin: Connector,
        value: str,
        update_origin: bool = True,
    ) -> PropagationResult:
        """Write ``value`` at ``origin`` and propagate it to everything connected.

        Args:
            origin: Connector the value enters at.
            value: Text value to write.
            update_origin: Whether ``origin`` itself is written too.

        Returns:
            PropagationResult with statistics.

        Raises:
            UnknownNodeError: If ``origin`` names an unregistered node.
            InvalidPropertyError: If a written connector names a missing property.
            PropagationLimitError: If ripples do not settle within the configured bounds.
        """
        self.resolve(origin)
        result = propagate(
            self._graph,
            self.resolve,
            origin,
            value,
            update_origin=update_origin,
            config=self.config,
        )
        logger.debug(
            "Update propagated",
            origin=origin.path,
            endpoints_updated=result.endpoints_updated,
            ripples=result.ripples,
            max_depth=result.max_depth,
        )
        return result

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, dict[str, str]]:
        """Current value of every property, keyed by node id then property name."""
        return {
            node_id: {name: prop.get() for name, prop in node.properties.items()}
            for node_id, node in self._nodes.items()
        }

    def display(self) -> str:
        """Dump every node with its resolved property values as indented JSON."""
        described: list[dict[str, Any]] = [node.describe() for node in self._nodes.values()]
        dump = "\n".join(json.dumps(entry, indent=2) for entry in described)
        logger.info("Node system state", nodes=len(described), dump=dump)
        return dump
