"""
Size and padding normalization.

Sizes are declared as absolute units, percentages of the containing
dimension, numeric strings, or 'auto'. Padding follows CSS shorthand.
"""

from __future__ import annotations

import math
import re
from fractions import Fraction
from typing import Sequence

from grid_types import AUTO, NO_PADDING, InvalidDeclaration, InvalidSizeSpec, Padding, Size, SizeSpec

__all__ = ["normalize_size", "normalize_padding"]

_PERCENT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%\s*$")
_NUMERIC_RE = re.compile(r"^\s*(\d+)")


def normalize_size(declared: SizeSpec, containing: int) -> Size:
    """
    Convert a declared size into absolute units.

    Args:
        declared: int, percentage string ('11%'), numeric string ('12', '12px'),
            'auto', or None (same as 'auto')
        containing: The containing dimension percentages are taken of

    Returns:
        Absolute size, or AUTO if resolution is deferred to the layout solver

    Raises:
        InvalidSizeSpec: If the value has none of the recognized shapes
    """
    if declared is None or declared == AUTO:
        return AUTO

    # bool is an int subclass; True is not a size
    if isinstance(declared, bool):
        raise InvalidSizeSpec(declared, "Booleans are not sizes")

    if isinstance(declared, int):
        if declared < 0:
            raise InvalidSizeSpec(declared, "Absolute sizes must be non-negative")
        return declared

    if isinstance(declared, str):
        match = _PERCENT_RE.match(declared)
        if match:
            # Exact arithmetic, halves round up
            scaled = Fraction(match.group(1)) * containing / 100
            return math.floor(scaled + Fraction(1, 2))

        match = _NUMERIC_RE.match(declared)
        if match:
            return int(match.group(1))

    raise InvalidSizeSpec(declared)


def normalize_padding(declared: int | Sequence[int] | None) -> Padding:
    """
    Expand a padding declaration into (top, right, bottom, left).

    Same rules as CSS shorthand:
      p            -> (p, p, p, p)
      [a]          -> (a, a, a, a)
      [a, b]       -> (a, b, a, b)
      [a, b, c]    -> (a, b, c, b)
      [a, b, c, d] -> (a, b, c, d)
    Extra entries past the fourth are ignored.
    """
    if not declared:
        return NO_PADDING

    if isinstance(declared, int):
        values: list[int] = [declared]
    elif isinstance(declared, (list, tuple)):
        values = list(declared[:4])
    else:
        raise InvalidDeclaration(
            f"Invalid padding: {declared!r}\n"
            f"  Expected an integer or a sequence of 1-4 integers"
        )

    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidDeclaration(
                f"Invalid padding value {value!r} in {declared!r}\n"
                f"  Padding values must be non-negative integers"
            )

    match values:
        case [p]:
            return (p, p, p, p)
        case [v, h]:
            return (v, h, v, h)
        case [t, h, b]:
            return (t, h, b, h)
        case [t, r, b, l]:
            return (t, r, b, l)
        case _:
            # Only reachable for an empty sequence, which is falsy above
            return NO_PADDING
