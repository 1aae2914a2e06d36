"""
Layout solver: resolves every cell's width, height and origin for a viewport.

Fixed and percentage sizes are resolved first. Whatever space is left in a
row is shared evenly among its 'auto' width cells, and whatever height is
left in the grid is shared among 'auto' height rows. In both cases the
remainder of the integer division goes to the LAST auto cell/row, so the
pieces always add up to the viewport exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import accumulate
from typing import Sequence

from grid_types import AUTO, InvalidSizeSpec, RowDecl, Size, SizeSpec
from sizing import normalize_size

__all__ = ["CellGeometry", "Layout", "solve"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellGeometry:
    """Resolved box of one cell, in columns/rows from the grid's top-left."""

    width: int
    height: int
    x: int
    y: int


@dataclass(frozen=True)
class Layout:
    """Result of solving a grid declaration against a viewport."""

    width: int
    height: int
    row_heights: tuple[int, ...]
    row_offsets: tuple[int, ...]
    cells: tuple[tuple[CellGeometry, ...], ...]


def _normalize_at(declared: SizeSpec, containing: int, row: int, col: int, axis: str) -> Size:
    """normalize_size, with the cell position added to any error."""
    try:
        return normalize_size(declared, containing)
    except InvalidSizeSpec as exc:
        raise InvalidSizeSpec(declared, f"Declared {axis} of cell at row {row}, column {col}") from exc


def _distribute(remaining: int, count: int) -> list[int]:
    """Split remaining into count integer shares; the last share takes the remainder."""
    share, extra = divmod(remaining, count)
    shares = [share] * count
    shares[-1] += extra
    return shares


def _prefix_offsets(sizes: Sequence[int]) -> tuple[int, ...]:
    return tuple(accumulate(sizes[:-1], initial=0)) if sizes else ()


def _clamp(sizes: list[int], what: str, viewport: int) -> list[int]:
    """Clamp negative sizes (fixed sizes overflowing the viewport) to zero."""
    if any(size < 0 for size in sizes):
        logger.warning(
            "%s overflow the viewport (%d): resolved sizes %s clamped to zero",
            what, viewport, sizes,
        )
        return [max(size, 0) for size in sizes]
    return sizes


def solve(rows: Sequence[RowDecl], viewport_width: int, viewport_height: int) -> Layout:
    """
    Resolve the geometry of every cell.

    Each declared size is normalized before anything is produced, so an
    invalid declaration raises without partial results.

    Args:
        rows: Declared rows
        viewport_width: Columns available to every row
        viewport_height: Rows available to the whole grid

    Returns:
        Layout with per-cell geometry and per-row heights/offsets

    Raises:
        InvalidSizeSpec: If any declared width or height is malformed
    """
    widths: list[list[int]] = []
    cell_heights: list[list[Size]] = []
    row_heights: list[int] = []
    auto_rows: list[int] = []
    fixed_height = 0

    for r_idx, row in enumerate(rows):
        row_widths: list[int] = []
        auto_cols: list[int] = []
        heights: list[Size] = []

        for c_idx, cell in enumerate(row.cells):
            width = _normalize_at(cell.width, viewport_width, r_idx, c_idx, "width")
            height = _normalize_at(cell.height, viewport_height, r_idx, c_idx, "height")

            if width == AUTO:
                auto_cols.append(c_idx)
                row_widths.append(0)
            else:
                row_widths.append(width)
            heights.append(height)

        if auto_cols:
            remaining = viewport_width - sum(row_widths)
            for c_idx, share in zip(auto_cols, _distribute(remaining, len(auto_cols))):
                row_widths[c_idx] = share

        widths.append(_clamp(row_widths, f"Fixed widths in row {r_idx}", viewport_width))
        cell_heights.append(heights)

        # A single auto-height cell makes the whole row auto-height
        if any(height == AUTO for height in heights):
            auto_rows.append(r_idx)
            row_heights.append(0)
        else:
            tallest = max((h for h in heights if h != AUTO), default=0)
            row_heights.append(tallest)
            fixed_height += tallest

    if auto_rows:
        remaining = viewport_height - fixed_height
        for r_idx, share in zip(auto_rows, _distribute(remaining, len(auto_rows))):
            row_heights[r_idx] = share

    row_heights = _clamp(row_heights, "Fixed row heights", viewport_height)
    row_offsets = _prefix_offsets(row_heights)

    cells: list[tuple[CellGeometry, ...]] = []
    for r_idx, row_widths in enumerate(widths):
        x_offsets = _prefix_offsets(row_widths)
        cells.append(tuple(
            CellGeometry(
                width=width,
                # Auto cell heights inherit the resolved row height
                height=row_heights[r_idx] if height == AUTO else height,
                x=x,
                y=row_offsets[r_idx],
            )
            for width, height, x in zip(row_widths, cell_heights[r_idx], x_offsets)
        ))

    logger.info(
        "solve: viewport=%dx%d rows=%d auto_rows=%d row_heights=%s",
        viewport_width, viewport_height, len(row_heights), len(auto_rows), row_heights,
    )

    return Layout(
        width=viewport_width,
        height=viewport_height,
        row_heights=tuple(row_heights),
        row_offsets=row_offsets,
        cells=tuple(cells),
    )
