"""Nodes and the properties they expose.

A node owns a fixed set of named properties. Each property is a small
get/set capability record; a setter applies the written value to the node
and reports which *other* properties of the same node changed as a result
(the ripple). The propagation engine only ever talks to properties, so all
knowledge about derived values stays here.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Final

from nodewire.exceptions import InvalidPropertyError

from .base import NodeKind, generate_id
from .numeric import INVALID, NAN_STRING, Numeric, Valid, from_number, parse_numeric, render

MI_TO_KM: Final = 1.60934

# Sibling property name -> new text value
Ripple = dict[str, str]


@dataclass(frozen=True)
class Property:
    """A named, gettable/settable slot on a node."""

    name: str
    getter: Callable[[], str]
    setter: Callable[[str], Ripple | None]

    def get(self) -> str:
        return self.getter()

    def set(self, value: str) -> Ripple | None:
        """Write ``value``; returns changed siblings, or None if none changed."""
        return self.setter(value)


class Node:
    """Base class for all node kinds.

    Subclasses declare their ``kind`` and build their properties once in
    ``__init__``; the property set never changes afterwards.
    """

    kind: ClassVar[NodeKind]

    def __init__(self, name: str, properties: list[Property], node_id: str | None = None) -> None:
        self._id = node_id or generate_id()
        self.name = name
        self._properties: Mapping[str, Property] = MappingProxyType(
            {prop.name: prop for prop in properties}
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def properties(self) -> Mapping[str, Property]:
        """Read-only mapping of property name to property."""
        return self._properties

    def get_property(self, name: str) -> Property:
        """Look up a property by name.

        Raises:
            InvalidPropertyError: If the node has no such property.
        """
        try:
            return self._properties[name]
        except KeyError:
            raise InvalidPropertyError(self._id, name, self._properties) from None

    def describe(self) -> dict[str, Any]:
        """JSON-friendly view of the node with resolved property values."""
        return {
            "name": self.name,
            "id": self._id,
            "type": self.kind.value,
            "properties": [f"{name}: {prop.get()}" for name, prop in self._properties.items()],
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, name={self.name!r})"


class InputNode(Node):
    """Holds a single ``value`` property that stores whatever is written."""

    kind = NodeKind.INPUT

    def __init__(
        self,
        name: str = "input",
        value: str = "default",
        node_id: str | None = None,
    ) -> None:
        self._value = value
        super().__init__(
            name,
            [Property("value", self._get_value, self._set_value)],
            node_id=node_id,
        )

    def _get_value(self) -> str:
        return self._value

    def _set_value(self, value: str) -> Ripple | None:
        self._value = value
        return None


class DummyInputNode(InputNode):
    """Stand-in returned for unknown ids; reads a fixed value and ignores writes."""

    DUMMY_ID: ClassVar[str] = "dummy"
    DUMMY_VALUE: ClassVar[str] = "default node"

    def __init__(self) -> None:
        super().__init__(name=self.DUMMY_VALUE, value=self.DUMMY_VALUE, node_id=self.DUMMY_ID)

    def _set_value(self, value: str) -> Ripple | None:
        return None


class DistanceConverterNode(Node):
    """Converts between ``miles`` and ``km``.

    Writing either side stores the written text verbatim and recomputes the
    other side (1 mile = 1.60934 km), reporting it as a ripple. Text that does
    not parse as a finite number, or whose conversion overflows to infinity,
    poisons both sides, and the ripple reports both ``miles`` and ``km`` as
    ``NAN_STRING``.

    Construction: an initial ``miles`` wins over ``km``; with neither, both
    sides start out invalid.
    """

    kind = NodeKind.DISTANCE_CONVERTER

    def __init__(
        self,
        name: str,
        miles: str | None = None,
        km: str | None = None,
        node_id: str | None = None,
    ) -> None:
        self._miles: Numeric = INVALID
        self._km: Numeric = INVALID
        super().__init__(
            name,
            [
                Property("miles", lambda: render(self._miles), self._set_miles),
                Property("km", lambda: render(self._km), self._set_km),
            ],
            node_id=node_id,
        )

        if miles is not None and miles != NAN_STRING:
            self._set_miles(miles)
        elif km is not None and km != NAN_STRING:
            self._set_km(km)

    @property
    def miles_value(self) -> Numeric:
        return self._miles

    @property
    def km_value(self) -> Numeric:
        return self._km

    def _poison(self) -> Ripple:
        self._miles = INVALID
        self._km = INVALID
        return {"miles": NAN_STRING, "km": NAN_STRING}

    def _set_miles(self, value: str) -> Ripple:
        parsed = parse_numeric(value)
        if not isinstance(parsed, Valid):
            return self._poison()
        km = from_number(parsed.number * MI_TO_KM)
        if not isinstance(km, Valid):
            return self._poison()
        self._miles = parsed
        self._km = km
        return {"km": km.text}

    def _set_km(self, value: str) -> Ripple:
        parsed = parse_numeric(value)
        if not isinstance(parsed, Valid):
            return self._poison()
        miles = from_number(parsed.number / MI_TO_KM)
        if not isinstance(miles, Valid):
            return self._poison()
        self._km = parsed
        self._miles = miles
        return {"miles": miles.text}


AnyNode = InputNode | DistanceConverterNode


def create_input_node(name: str = "input", value: str = "default") -> InputNode:
    """Create an input node with a fresh id."""
    return InputNode(name=name, value=value)


def create_distance_converter_node(
    name: str,
    miles: str | None = None,
    km: str | None = None,
) -> DistanceConverterNode:
    """Create a miles/km converter node with a fresh id."""
    return DistanceConverterNode(name=name, miles=miles, km=km)


def create_dummy_node() -> DummyInputNode:
    """Fallback node handed out for ids the system does not know."""
    return DummyInputNode()
