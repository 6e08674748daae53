"""Nodewire exception hierarchy.

Provides structured exceptions for error handling throughout the codebase.
All exceptions inherit from NodewireError for easy catching.
"""

from __future__ import annotations

from collections.abc import Iterable


class NodewireError(Exception):
    """Base exception for all Nodewire errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "nodewire_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class UnknownNodeError(NodewireError):
    """A node id is not registered with the system.

    Raised by ``connect`` (and ``update``) when a connector names a node
    that was never added or has been removed.

    Attributes:
        node_id: The id that could not be resolved.
        registered_ids: Ids registered at the time of the failure (diagnostic only).
    """

    code: str = "unknown_node"

    def __init__(self, node_id: str, registered_ids: Iterable[str] = ()) -> None:
        self.node_id = node_id
        self.registered_ids = list(registered_ids)
        super().__init__(
            f"invalid nodeId {node_id} specified\n\n"
            f"System nodes: [{','.join(self.registered_ids)}]"
        )

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "node_id": self.node_id,
                "registered_ids": self.registered_ids,
                "message": self.message,
            }
        }


class InvalidPropertyError(NodewireError):
    """A connector names a property its node does not expose.

    Attributes:
        node_id: Id of the node that was addressed.
        property_name: The property name that does not exist.
        available: Property names the node does expose.
    """

    code: str = "invalid_property"

    def __init__(self, node_id: str, property_name: str, available: Iterable[str] = ()) -> None:
        self.node_id = node_id
        self.property_name = property_name
        self.available = list(available)
        super().__init__(
            f"node {node_id} has no property {property_name!r} "
            f"(available: {', '.join(self.available) or 'none'})"
        )

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "node_id": self.node_id,
                "property_name": self.property_name,
                "available": self.available,
                "message": self.message,
            }
        }


class PropagationLimitError(NodewireError):
    """Propagation did not converge within the configured bounds.

    Raised when ripple recalculations keep re-entering each other, e.g. when
    two derived properties of the same node are wired to each other.
    Values written before the limit tripped are left in place.

    Attributes:
        limit_name: Which bound was exceeded (``max_ripple_depth`` or ``max_setter_calls``).
        limit: The configured value of that bound.
        origin_path: Path of the top-level update's origin.
    """

    code: str = "propagation_not_converged"

    def __init__(self, limit_name: str, limit: int, origin_path: str) -> None:
        self.limit_name = limit_name
        self.limit = limit
        self.origin_path = origin_path
        super().__init__(
            f"Propagation from {origin_path} did not converge: {limit_name}={limit} exceeded"
        )

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "limit_name": self.limit_name,
                "limit": self.limit,
                "origin_path": self.origin_path,
                "message": self.message,
            }
        }


class ConfigurationError(NodewireError):
    """Configuration error.

    Raised when required configuration is missing or invalid.
    """

    code: str = "configuration_error"
