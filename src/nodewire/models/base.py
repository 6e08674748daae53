"""Base models and shared types for Nodewire node systems."""

from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class NodeKind(str, Enum):
    """Closed set of node kinds a system can hold."""

    INPUT = "input"
    DISTANCE_CONVERTER = "distanceConverter"


def generate_id(prefix: str = "node") -> str:
    """Generate a unique ID with the given prefix.

    Examples:
        generate_id() -> "node_a1b2c3d4e5f6"
    """
    return f"{prefix}_{uuid4().hex[:12]}"


def get_path(node_id: str, prop_name: str) -> str:
    """Canonical ``"{node_id}.{prop_name}"`` path of an endpoint."""
    return f"{node_id}.{prop_name}"


def get_node_id(path: str) -> str:
    """Node id portion of a canonical path."""
    return path.split(".", 1)[0]


def get_property(path: str) -> str:
    """Property name portion of a canonical path (empty if the path has none)."""
    _, _, prop_name = path.partition(".")
    return prop_name


class Connector(BaseModel):
    """One property slot of one node: the unit that gets wired together.

    Two connectors are equal (and hash equal) iff their paths are equal, so a
    connector is safe to use as a set member or dict key.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    node_id: str = Field(pattern=r"^[^.]+$", description="Id of the owning node (no dots)")
    prop_name: str = Field(min_length=1, description="Name of the property on that node")

    @property
    def path(self) -> str:
        """Canonical adjacency key, ``"{node_id}.{prop_name}"``."""
        return get_path(self.node_id, self.prop_name)

    @classmethod
    def from_path(cls, path: str) -> Connector:
        """Rebuild a connector from its canonical path."""
        return cls(node_id=get_node_id(path), prop_name=get_property(path))

    def sibling(self, prop_name: str) -> Connector:
        """Connector for another property of the same node."""
        return Connector(node_id=self.node_id, prop_name=prop_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Connector):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __str__(self) -> str:
        return self.path


def create_connector(node_id: str, prop_name: str) -> Connector:
    """Create a connector addressing ``prop_name`` on node ``node_id``."""
    return Connector(node_id=node_id, prop_name=prop_name)
