"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from nodewire.models import Connector
from nodewire.propagation import PropagationConfig
from nodewire.system import NodeSystem


@pytest.fixture
def system() -> NodeSystem:
    """A fresh node system with default propagation bounds."""
    return NodeSystem(config=PropagationConfig())


@pytest.fixture
def values_equal() -> Callable[[NodeSystem, list[Connector]], bool]:
    """Check that every connector in the list reads the same value."""

    def _values_equal(system: NodeSystem, connectors: list[Connector]) -> bool:
        first, *rest = connectors
        expected = system.read(first)
        return all(system.read(connector) == expected for connector in rest)

    return _values_equal
