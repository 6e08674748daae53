"""Propagation of written values through connected node properties.

Example:
    ```python
    from nodewire.propagation import PropagationConfig, propagate

    result = propagate(graph, resolve, origin, "10", config=PropagationConfig())
    print(f"{result.endpoints_updated} setters called, {result.ripples} ripples")
    ```
"""

from .algorithms import (
    DEFAULT_MAX_RIPPLE_DEPTH,
    DEFAULT_MAX_SETTER_CALLS,
    PropagationConfig,
    PropagationResult,
    PropertyResolver,
    collect_update_targets,
    propagate,
)

__all__ = [
    # Config
    "PropagationConfig",
    "PropagationResult",
    "PropertyResolver",
    # Functions
    "collect_update_targets",
    "propagate",
    # Constants
    "DEFAULT_MAX_RIPPLE_DEPTH",
    "DEFAULT_MAX_SETTER_CALLS",
]
