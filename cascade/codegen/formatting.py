"""Color / unit literal formatting for generated style objects.

Inputs are not validated: channels outside 0.0–1.0 or negative lengths are
formatted as given (garbage in, garbage out).
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Union

from .models import Color

Number = Union[int, float]


def plain_number(value: Number) -> Number:
    """Collapse integral floats to int so they print like JSON numbers (24.0 → 24)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_number(value: Number) -> str:
    """Print a number the way JavaScript does.

    Shortest round-trip digits, positional between 1e-6 and 1e21, exponent form
    (``1e-7``, ``1.5e+21``) outside that range.
    """
    if isinstance(value, float) and math.isfinite(value) and value != 0:
        magnitude = abs(value)
        if magnitude < 1e-6 or magnitude >= 1e21:
            mantissa, _, exponent = repr(value).partition("e")
            return f"{mantissa}e{int(exponent):+d}"
        if not value.is_integer():
            return format(Decimal(repr(value)), "f")
    return repr(plain_number(value))


def to_px(value: Number) -> str:
    """Append the px unit. Zero and negative values pass through unchanged."""
    return f"{format_number(value)}px"


def _channel(value: Number) -> int:
    # Halves round up (127.5 → 128), not to even
    return math.floor(value * 255 + 0.5)


def color_to_string(color: Color) -> str:
    """Format a normalized RGBA color as a CSS color literal.

    ``rgba(R, G, B, A)`` when alpha < 1 (alpha printed unrounded),
    ``rgb(R, G, B)`` otherwise.
    """
    r = _channel(color.r)
    g = _channel(color.g)
    b = _channel(color.b)
    if color.a < 1:
        return f"rgba({r}, {g}, {b}, {format_number(color.a)})"
    return f"rgb({r}, {g}, {b})"
