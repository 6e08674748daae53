"""Connection graph between node properties."""

from .connections import ConnectionGraph

__all__ = ["ConnectionGraph"]
