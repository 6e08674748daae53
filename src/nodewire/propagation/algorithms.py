"""Value propagation through the connection graph.

A write to one connector is pushed to every connector in its connected
component. When a setter reports a ripple (derived sibling values on the
same node), each sibling starts a nested propagation of its own with a fresh
reachability scan rooted at that sibling.

Design principles:
1. The engine never knows node kinds; derived values come only from setters
2. Application order is discovery order, so results are reproducible
3. Ripple nesting and total setter calls are bounded; a propagation that
   does not settle fails with PropagationLimitError instead of recursing forever
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from nodewire.exceptions import ConfigurationError, PropagationLimitError
from nodewire.logging import get_logger, propagation_context

if TYPE_CHECKING:
    from nodewire.config import Settings
    from nodewire.graph import ConnectionGraph
    from nodewire.models import Connector, Property

logger = get_logger(__name__)


# Default configuration
DEFAULT_MAX_RIPPLE_DEPTH = 64
DEFAULT_MAX_SETTER_CALLS = 10_000

PropertyResolver = Callable[["Connector"], "Property"]


@dataclass
class PropagationConfig:
    """Bounds for a single top-level propagation.

    Attributes:
        max_ripple_depth: Maximum nesting of ripple-triggered propagations.
        max_setter_calls: Maximum setter invocations, nested ripples included.
    """

    max_ripple_depth: int = DEFAULT_MAX_RIPPLE_DEPTH
    max_setter_calls: int = DEFAULT_MAX_SETTER_CALLS

    def __post_init__(self) -> None:
        if self.max_ripple_depth < 1:
            raise ConfigurationError(f"max_ripple_depth must be >= 1, got {self.max_ripple_depth}")
        if self.max_setter_calls < 1:
            raise ConfigurationError(f"max_setter_calls must be >= 1, got {self.max_setter_calls}")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PropagationConfig:
        """Build a config from ``Settings`` (the global instance if None)."""
        if settings is None:
            from nodewire.config import settings as global_settings

            settings = global_settings
        return cls(
            max_ripple_depth=settings.max_ripple_depth,
            max_setter_calls=settings.max_setter_calls,
        )


class PropagationResult(BaseModel):
    """Statistics for one top-level propagation.

    Attributes:
        origin: Path of the connector the update started from.
        endpoints_updated: Number of setter invocations, nested ripples included.
        ripples: Number of ripple-triggered nested propagations.
        endpoints_skipped: Targets left alone because a ripple already wrote them.
        max_depth: Deepest ripple nesting reached (0 = no ripples followed).
    """

    model_config = ConfigDict(extra="forbid")

    origin: str
    endpoints_updated: int = Field(default=0, ge=0)
    endpoints_skipped: int = Field(default=0, ge=0)
    ripples: int = Field(default=0, ge=0)
    max_depth: int = Field(default=0, ge=0)


def collect_update_targets(
    graph: ConnectionGraph,
    origin: Connector,
    update_origin: bool = True,
) -> list[Connector]:
    """Connectors a propagation from ``origin`` writes to, in application order.

    The origin comes first when ``update_origin`` is set (even if it has no
    connections), followed by the rest of its connected component in
    breadth-first discovery order.
    """
    others = graph.reachable([origin], origin)
    if update_origin:
        return [origin, *others]
    return others


def propagate(
    graph: ConnectionGraph,
    resolve: PropertyResolver,
    origin: Connector,
    value: str,
    update_origin: bool = True,
    config: PropagationConfig | None = None,
) -> PropagationResult:
    """Push ``value`` from ``origin`` through its connected component.

    Each target's setter is called with ``value``. Ripples reported by a
    setter are followed immediately, before the next target, by propagating
    each sibling's new value from the sibling connector (without rewriting the
    sibling itself). Targets a ripple already wrote are not overwritten
    afterwards with the stale ``value``, so a poisoned converter leaves its
    whole component reading ``NAN_STRING``.

    Args:
        graph: Adjacency to traverse.
        resolve: Maps a connector to the property it addresses. Expected to
            raise for unknown nodes or properties.
        origin: Connector the value enters the graph at.
        value: Text value to write.
        update_origin: Whether ``origin`` itself is written too.
        config: Propagation bounds.

    Returns:
        PropagationResult with statistics.

    Raises:
        PropagationLimitError: If the ripple depth or setter call bound is exceeded.
    """
    if config is None:
        config = PropagationConfig()

    result = PropagationResult(origin=origin.path)
    with propagation_context(origin.path):
        _propagate(graph, resolve, origin, value, update_origin, config, result, depth=0)
    return result


def _propagate(
    graph: ConnectionGraph,
    resolve: PropertyResolver,
    origin: Connector,
    value: str,
    update_origin: bool,
    config: PropagationConfig,
    result: PropagationResult,
    depth: int,
) -> set[str]:
    """Write ``value`` to the targets of ``origin``; returns every path written.

    A target that one of this level's ripples already wrote is skipped, so
    the derived value is not overwritten by the stale ``value``.
    """
    result.max_depth = max(result.max_depth, depth)
    written: set[str] = set()
    settled: set[str] = set()

    for target in collect_update_targets(graph, origin, update_origin):
        if target.path in settled:
            result.endpoints_skipped += 1
            continue

        if result.endpoints_updated >= config.max_setter_calls:
            _limit_exceeded("max_setter_calls", config.max_setter_calls, result)

        ripple = resolve(target).set(value)
        result.endpoints_updated += 1
        written.add(target.path)
        if not ripple:
            continue

        if depth + 1 > config.max_ripple_depth:
            _limit_exceeded("max_ripple_depth", config.max_ripple_depth, result)

        for sibling_name, sibling_value in ripple.items():
            result.ripples += 1
            settled |= _propagate(
                graph,
                resolve,
                target.sibling(sibling_name),
                sibling_value,
                False,
                config,
                result,
                depth + 1,
            )
        written |= settled

    return written


def _limit_exceeded(limit_name: str, limit: int, result: PropagationResult) -> None:
    logger.warning(
        "Propagation limit exceeded",
        limit_name=limit_name,
        limit=limit,
        endpoints_updated=result.endpoints_updated,
        ripples=result.ripples,
    )
    raise PropagationLimitError(limit_name, limit, result.origin)
