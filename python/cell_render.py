"""
Cell text rendering: shapes a cell's text into exactly-sized display lines.
"""

from __future__ import annotations

from ansi_text import pad_to_width, slice_by_display_width, wrap_to_width
from grid_types import Padding

__all__ = ["blank_line", "render_cell_lines"]


def blank_line(width: int) -> str:
    """A line of width spaces (empty for width <= 0)."""
    return " " * max(width, 0)


def render_cell_lines(
    text: str,
    width: int,
    height: int,
    padding: Padding,
    wrap: bool = True,
) -> tuple[str, ...]:
    """
    Render a cell's text into its box.

    The padding box is applied like CSS: top and left padding become blank
    rows/columns, right padding narrows the text area, bottom padding limits
    how many content lines fit. Bottom padding and any shortfall rows are
    not materialized; the grid fills them with blank lines when composing.

    Args:
        text: Cell text, possibly containing escape sequences
        width: Resolved cell width in columns
        height: Resolved cell height in rows
        padding: (top, right, bottom, left)
        wrap: Word-wrap to the text width, otherwise cut each line at it

    Returns:
        At most height lines, each exactly width display columns
    """
    if width <= 0 or height <= 0:
        return ()

    top, right, bottom, left = padding
    text_width = width - left - right
    text_height = height - top - bottom

    if text_width <= 0 or text_height <= 0:
        lines: list[str] = []
    elif wrap:
        lines = wrap_to_width(text, text_width).split("\n")
    else:
        lines = [slice_by_display_width(line, 0, text_width) for line in text.split("\n")]

    # Overflow lines are dropped
    lines = lines[: max(text_height, 0)]

    if left:
        lines = [" " * left + line for line in lines]
    if top:
        lines = [""] * top + lines

    return tuple(pad_to_width(line, width) for line in lines[:height])
