"""Undirected connection graph between node properties.

Adjacency is keyed by connector path. Every edge is stored in both
directions, and each neighbor set keeps insertion order so traversals are
reproducible.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from nodewire.models import Connector, get_node_id

logger = logging.getLogger(__name__)


class ConnectionGraph:
    """Symmetric adjacency between connectors.

    A connector with no entry behaves exactly like a connector with an empty
    neighbor set.
    """

    def __init__(self) -> None:
        # path -> {neighbor path -> neighbor}; inner dicts act as ordered sets
        self._adjacency: dict[str, dict[str, Connector]] = {}

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, connector: object) -> bool:
        return isinstance(connector, Connector) and connector.path in self._adjacency

    def add_connection(self, first: Connector, second: Connector) -> None:
        """Connect two endpoints in both directions. Repeating a connect is a no-op."""
        self._adjacency.setdefault(first.path, {})[second.path] = second
        self._adjacency.setdefault(second.path, {})[first.path] = first
        logger.debug("Connected %s <-> %s", first.path, second.path)

    def remove_connection(self, first: Connector, second: Connector) -> bool:
        """Disconnect two endpoints in both directions.

        A side with no recorded neighbors is treated as empty rather than
        failing, so asymmetric state is cleaned up instead of raising.

        Returns:
            True if an edge was removed from either side.
        """
        first_neighbors = self._adjacency.get(first.path)
        second_neighbors = self._adjacency.get(second.path)
        if not first_neighbors and not second_neighbors:
            return False

        removed = False
        if first_neighbors is not None:
            removed = first_neighbors.pop(second.path, None) is not None or removed
        if second_neighbors is not None:
            removed = second_neighbors.pop(first.path, None) is not None or removed

        if removed:
            logger.debug("Disconnected %s <-> %s", first.path, second.path)
        return removed

    def remove_node(self, node_id: str) -> int:
        """Drop every edge touching any property of ``node_id``.

        Returns:
            Number of adjacency entries removed (keys plus neighbor references).
        """
        removed = 0
        for path in list(self._adjacency):
            neighbors = self._adjacency[path]
            if get_node_id(path) == node_id:
                del self._adjacency[path]
                removed += 1
                continue
            for neighbor_path in [p for p, c in neighbors.items() if c.node_id == node_id]:
                del neighbors[neighbor_path]
                removed += 1
        return removed

    def neighbors(self, connector: Connector) -> list[Connector]:
        """Direct neighbors of ``connector`` in insertion order."""
        return list(self._adjacency.get(connector.path, {}).values())

    def are_connected(self, first: Connector, second: Connector) -> bool:
        return second.path in self._adjacency.get(first.path, {})

    def reachable(self, visited: Iterable[Connector], origin: Connector) -> list[Connector]:
        """Collect every connector reachable from ``origin``.

        Breadth-first over the adjacency, skipping anything in ``visited`` and
        never scanning a connector twice, so loops terminate. Seeded connectors
        are not crossed. ``origin`` itself shows up in the result when it is
        reachable back through a neighbor and was not seeded into ``visited``.

        Args:
            visited: Connectors to exclude from the result.
            origin: Where the scan starts.

        Returns:
            Reachable connectors in order of discovery.
        """
        seen = {connector.path for connector in visited}
        found: list[Connector] = []
        queue: deque[Connector] = deque([origin])

        while queue:
            current = queue.popleft()
            for neighbor in self._adjacency.get(current.path, {}).values():
                if neighbor.path in seen:
                    continue
                seen.add(neighbor.path)
                found.append(neighbor)
                if neighbor.path != origin.path:
                    queue.append(neighbor)

        return found

    def as_mapping(self) -> Mapping[str, tuple[Connector, ...]]:
        """Read-only snapshot of the adjacency: path -> neighbors."""
        return MappingProxyType(
            {path: tuple(neighbors.values()) for path, neighbors in self._adjacency.items()}
        )
