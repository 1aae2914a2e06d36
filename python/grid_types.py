"""
Shared type definitions for the termgrid system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union

AUTO: Literal["auto"] = "auto"

# What a caller may write for a width/height before normalization
SizeSpec = Union[int, str, None]

# Normalized size: absolute units, or AUTO (resolved later by the layout solver)
Size = Union[int, Literal["auto"]]

# (top, right, bottom, left)
Padding = tuple[int, int, int, int]

NO_PADDING: Padding = (0, 0, 0, 0)


# =============================================================================
# Errors
# =============================================================================


class InvalidSizeSpec(ValueError):
    """A declared width/height is not an absolute size, percentage, numeric string or 'auto'."""

    def __init__(self, value: object, detail: str = "") -> None:
        self.value = value
        message = f"Invalid size spec: {value!r}"
        if detail:
            message += f"\n  {detail}"
        message += (
            "\n  Valid formats:"
            "\n    - non-negative integer (e.g. 10)"
            "\n    - percentage string (e.g. '50%', '12.5%')"
            "\n    - numeric string (e.g. '10', '10px')"
            "\n    - 'auto' or omitted"
        )
        super().__init__(message)


class InvalidDeclaration(ValueError):
    """The row/cell declaration tree has the wrong shape."""


class IndexOutOfRange(IndexError):
    """A (row, col) coordinate does not address an existing cell."""

    def __init__(self, row: int, col: int, shape: tuple[int, ...]) -> None:
        self.row = row
        self.col = col
        message = f"No cell at row {row}, column {col}\n  Grid has {len(shape)} rows"
        if 0 <= row < len(shape):
            message += f"; row {row} has {shape[row]} cells"
        super().__init__(message)


# =============================================================================
# Declarations (immutable, produced by grid_parser)
# =============================================================================


@dataclass(frozen=True)
class CellDecl:
    """A cell as the caller declared it."""

    width: SizeSpec = AUTO
    height: SizeSpec = AUTO
    text: str = ""
    wrap: bool = True
    padding: Padding = NO_PADDING


@dataclass(frozen=True)
class RowDecl:
    """A row of declared cells."""

    cells: tuple[CellDecl, ...]


@dataclass(frozen=True)
class GridDecl:
    """A whole grid declaration. Viewport dimensions are optional."""

    rows: tuple[RowDecl, ...]
    width: int | None = None
    height: int | None = None


# =============================================================================
# Live grid state (owned by termgrid.Grid, never handed out)
# =============================================================================


@dataclass
class Cell:
    """A cell with its resolved geometry and rendered lines."""

    decl: CellDecl
    text: str
    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0
    lines: tuple[str, ...] = ()

    @property
    def wrap(self) -> bool:
        return self.decl.wrap

    @property
    def padding(self) -> Padding:
        return self.decl.padding


@dataclass
class Row:
    """A horizontal band of cells."""

    cells: list[Cell] = field(default_factory=list)
    height: int = 0
    y: int = 0


@dataclass(frozen=True)
class CellSnapshot:
    """Read-only view of a cell, as returned by Grid.cell_at."""

    text: str
    wrap: bool
    width: int
    height: int
    padding: Padding
    x: int
    y: int
    lines: tuple[str, ...]


# =============================================================================
# Change notifications
# =============================================================================


class ChangeKind(Enum):
    """What kind of mutation a notification reports."""

    RESIZE = "resize"
    UPDATE = "update"


@dataclass(frozen=True)
class GridChange:
    """Delivered to subscribers after a successful resize or update."""

    kind: ChangeKind
    row: int | None = None  # Only set for UPDATE
    col: int | None = None
