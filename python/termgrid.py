"""
Terminal grid layout and rendering.

A Grid is built from a declaration of rows and cells, solved against a
viewport (columns x rows), and composed into one fixed-size string:

    grid = Grid({"rows": [["left", "right"], [{"text": "status", "height": 1}]]}, 40, 10)
    print(grid.serialize())

Flow: declaration -> grid_parser -> grid_layout.solve -> cell_render -> serialize.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from typing import Any, Callable

from ansi_text import measure_width, pad_to_width, slice_by_display_width, strip_sequences, wrap_to_width
from cell_render import blank_line, render_cell_lines
from grid_layout import CellGeometry, Layout, solve
from grid_parser import parse_declaration
from grid_types import (
    AUTO,
    Cell,
    CellDecl,
    CellSnapshot,
    ChangeKind,
    GridChange,
    GridDecl,
    IndexOutOfRange,
    InvalidDeclaration,
    InvalidSizeSpec,
    Padding,
    Row,
    RowDecl,
)
from sizing import normalize_padding, normalize_size

__all__ = [
    "AUTO",
    "CellDecl",
    "CellGeometry",
    "CellSnapshot",
    "ChangeKind",
    "Grid",
    "GridChange",
    "GridDecl",
    "IndexOutOfRange",
    "InvalidDeclaration",
    "InvalidSizeSpec",
    "Layout",
    "Padding",
    "RowDecl",
    "Subscriber",
    "SizeProvider",
    "measure_width",
    "normalize_padding",
    "normalize_size",
    "pad_to_width",
    "parse_declaration",
    "render_cell_lines",
    "slice_by_display_width",
    "solve",
    "strip_sequences",
    "terminal_size",
    "wrap_to_width",
]

logger = logging.getLogger(__name__)

Subscriber = Callable[[GridChange], None]
SizeProvider = Callable[[], tuple[int, int]]


def terminal_size() -> tuple[int, int]:
    """(columns, rows) of the controlling terminal, with the usual 80x24 fallback."""
    size = shutil.get_terminal_size()
    return size.columns, size.lines


class Grid:
    """
    A grid of rows and cells with resolved geometry.

    The grid owns its rows and cells; callers read them through cell_at()
    snapshots and change them only through resize() and update(). Every
    successful resize()/update() notifies subscribers once, after the
    change is fully applied.

    Not thread-safe: callers sharing a grid across threads must serialize access.
    """

    def __init__(
        self,
        declaration: Mapping[str, Any] | list[Any] | tuple[Any, ...] | GridDecl,
        width: int | None = None,
        height: int | None = None,
        *,
        size_provider: SizeProvider | None = None,
        on_update: Subscriber | None = None,
    ) -> None:
        """
        Args:
            declaration: Rows and cells, in any form grid_parser accepts
            width: Viewport columns; defaults to the declaration's, then the terminal's
            height: Viewport rows; same defaults as width
            size_provider: Source of the default viewport (default: terminal_size)
            on_update: Subscriber registered before any change is made

        Raises:
            InvalidDeclaration: If the declaration tree is malformed
            InvalidSizeSpec: If any declared size is malformed
        """
        decl = parse_declaration(declaration)
        self._decl = decl
        self._rows: list[Row] = [
            Row(cells=[Cell(decl=cell, text=cell.text) for cell in row.cells])
            for row in decl.rows
        ]
        self._subscribers: list[Subscriber] = []

        # Declared subscriber first, then the keyword one
        if isinstance(declaration, Mapping) and declaration.get("on_update") is not None:
            self.subscribe(declaration["on_update"])
        if on_update is not None:
            self.subscribe(on_update)

        if width is None:
            width = decl.width
        if height is None:
            height = decl.height
        if width is None or height is None:
            # Queried once, only for what was not given
            default_width, default_height = (size_provider or terminal_size)()
            width = default_width if width is None else width
            height = default_height if height is None else height

        self._width = 0
        self._height = 0
        self._apply(self._solve(width, height))

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def size(self) -> tuple[int, int]:
        """Current viewport (width, height)."""
        return self._width, self._height

    @property
    def shape(self) -> tuple[int, ...]:
        """Number of cells in each row."""
        return tuple(len(row.cells) for row in self._rows)

    def row_height(self, row: int) -> int:
        """Resolved height of a row."""
        if not 0 <= row < len(self._rows):
            raise IndexOutOfRange(row, 0, self.shape)
        return self._rows[row].height

    def _cell(self, row: int, col: int) -> Cell:
        if 0 <= row < len(self._rows) and 0 <= col < len(self._rows[row].cells):
            return self._rows[row].cells[col]
        raise IndexOutOfRange(row, col, self.shape)

    def cell_at(self, row: int, col: int) -> CellSnapshot:
        """
        Snapshot of a cell's content and resolved geometry.

        Raises:
            IndexOutOfRange: If (row, col) is not a cell
        """
        cell = self._cell(row, col)
        return CellSnapshot(
            text=cell.text,
            wrap=cell.wrap,
            width=cell.width,
            height=cell.height,
            padding=cell.padding,
            x=cell.x,
            y=cell.y,
            lines=cell.lines,
        )

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def _solve(self, width: int, height: int) -> Layout:
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidDeclaration(
                    f"Invalid viewport {name}: {value!r}\n"
                    f"  Viewport dimensions must be non-negative integers"
                )
        return solve(self._decl.rows, width, height)

    def _apply(self, layout: Layout) -> None:
        """Copy a solved layout onto the live cells and re-render every cell."""
        self._width = layout.width
        self._height = layout.height
        for row, height, y, geometries in zip(
            self._rows, layout.row_heights, layout.row_offsets, layout.cells
        ):
            row.height = height
            row.y = y
            for cell, geometry in zip(row.cells, geometries):
                cell.width = geometry.width
                cell.height = geometry.height
                cell.x = geometry.x
                cell.y = geometry.y
                cell.lines = self._render(cell)

    @staticmethod
    def _render(cell: Cell) -> tuple[str, ...]:
        return render_cell_lines(cell.text, cell.width, cell.height, cell.padding, cell.wrap)

    def resize(self, width: int, height: int) -> None:
        """
        Re-solve the layout for a new viewport and re-render every cell.

        The whole layout is solved before anything changes, so on error the
        grid keeps its previous geometry and no notification is sent.

        Raises:
            InvalidSizeSpec: If any declared size is malformed
        """
        layout = self._solve(width, height)
        self._apply(layout)
        logger.debug("resize: viewport=%dx%d", width, height)
        self._emit(GridChange(ChangeKind.RESIZE))

    def update(self, row: int, col: int, text: str) -> None:
        """
        Replace one cell's text and re-render that cell only.

        Raises:
            IndexOutOfRange: If (row, col) is not a cell
        """
        if not isinstance(text, str):
            raise InvalidDeclaration(f"Cell text must be a string, got {text!r}")
        cell = self._cell(row, col)
        cell.text = text
        cell.lines = self._render(cell)
        logger.debug("update: cell (%d, %d) now has %d lines", row, col, len(cell.lines))
        self._emit(GridChange(ChangeKind.UPDATE, row, col))

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Call callback after every successful resize() or update().

        Returns:
            A function that unsubscribes callback; calling it again does nothing
        """
        self._subscribers.append(callback)
        active = True

        def unsubscribe() -> None:
            nonlocal active
            if active:
                active = False
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def unsubscribe(self, callback: Subscriber) -> None:
        """Stop notifying callback. A callback subscribed twice is removed once."""
        try:
            self._subscribers.remove(callback)
        except ValueError:
            raise ValueError(f"{callback!r} is not subscribed") from None

    def _emit(self, change: GridChange) -> None:
        # Copy so subscribers may unsubscribe while being notified
        for callback in list(self._subscribers):
            callback(change)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def serialize(self) -> str:
        """
        Compose the grid into a single string.

        Every row contributes exactly row.height lines; each line is the
        row's cells side by side, with blank filler where a cell has fewer
        lines than the row. No trailing newline.
        """
        lines: list[str] = []
        for row in self._rows:
            for line_idx in range(row.height):
                lines.append("".join(
                    cell.lines[line_idx] if line_idx < len(cell.lines) else blank_line(cell.width)
                    for cell in row.cells
                ))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"Grid(size={self._width}x{self._height}, shape={self.shape})"
