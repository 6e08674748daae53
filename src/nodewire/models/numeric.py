"""Numeric values carried by derived nodes.

A converter keeps its state as ``Numeric``: either a ``Valid`` number together
with the exact text it was written as, or ``Invalid``. The ``NAN_STRING``
sentinel only appears when a value is rendered back to text.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Final

NAN_STRING: Final = "isNaN"

# Leading float literal: sign, digits with optional fraction (or a bare
# fraction), optional exponent. Trailing text after the literal is ignored.
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class Valid:
    """A finite number and the text it is displayed as."""

    number: float
    text: str


@dataclass(frozen=True)
class Invalid:
    """Marker for text that did not parse as a finite number."""


INVALID: Final = Invalid()

Numeric = Valid | Invalid


def parse_float_prefix(text: str) -> float | None:
    """Parse the leading float literal of ``text``.

    Returns None when ``text`` does not start (after whitespace) with a
    number, or the number is not finite.

    Examples:
        parse_float_prefix("10") -> 10.0
        parse_float_prefix(" 2.5km") -> 2.5
        parse_float_prefix("hi") -> None
    """
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value


def parse_numeric(text: str) -> Numeric:
    """Parse text into a ``Valid`` keeping the original text, or ``INVALID``."""
    value = parse_float_prefix(text)
    if value is None:
        return INVALID
    return Valid(number=value, text=text)


def format_number(value: float) -> str:
    """Render a float as text.

    Uses the shortest round-trip representation; integral values drop the
    trailing ``.0`` so ``16.0`` renders as ``"16"``.
    """
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def from_number(value: float) -> Numeric:
    """Wrap a computed float, rendering it with ``format_number``."""
    if not math.isfinite(value):
        return INVALID
    return Valid(number=value, text=format_number(value))


def render(value: Numeric) -> str:
    """Text form of a numeric value; ``NAN_STRING`` for ``Invalid``."""
    if isinstance(value, Valid):
        return value.text
    return NAN_STRING
