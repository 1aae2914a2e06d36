"""
Declaration parsing for termgrid.

A grid declaration can be written in several shorthand forms:
1. Full form: {"rows": [{"cells": [{"text": "a", "width": 10}, ...]}, ...]}
2. A bare sequence where a mapping is expected:
   - grid: [row, row, ...]   (same as {"rows": [...]})
   - row:  [cell, cell, ...] (same as {"cells": [...]})
3. A bare string where a cell is expected: "foo" (same as {"text": "foo"})

Already-parsed GridDecl/RowDecl/CellDecl values are accepted as-is at any level.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from grid_types import AUTO, CellDecl, GridDecl, InvalidDeclaration, RowDecl
from sizing import normalize_padding

__all__ = ["parse_declaration", "parse_row", "parse_cell"]

CELL_KEYS = frozenset({"width", "height", "text", "wrap", "padding"})
ROW_KEYS = frozenset({"cells"})
GRID_KEYS = frozenset({"rows", "width", "height", "on_update"})


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _check_keys(declared: Mapping[str, Any], allowed: frozenset[str], where: str) -> None:
    unknown = sorted(set(declared) - allowed)
    if unknown:
        raise InvalidDeclaration(
            f"Unknown option(s) {', '.join(map(repr, unknown))} in {where}\n"
            f"  Recognized options: {', '.join(sorted(allowed))}"
        )


def _viewport_dimension(value: Any, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidDeclaration(
            f"Invalid viewport {name}: {value!r}\n"
            f"  Viewport dimensions must be non-negative integers"
        )
    return value


def parse_cell(declared: Any, row_idx: int = 0, col_idx: int = 0) -> CellDecl:
    """
    Parse one cell declaration.

    Sizes are kept as declared (validated by the layout solver, since
    percentages depend on the viewport). Padding is expanded here.
    """
    where = f"cell at row {row_idx}, column {col_idx}"

    match declared:
        case CellDecl():
            return declared
        case str():
            return CellDecl(text=declared)
        case Mapping():
            _check_keys(declared, CELL_KEYS, where)
            text = declared.get("text") or ""
            if not isinstance(text, str):
                raise InvalidDeclaration(
                    f"Invalid text in {where}: {text!r}\n"
                    f"  Cell text must be a string"
                )
            width = declared.get("width")
            height = declared.get("height")
            return CellDecl(
                width=AUTO if width is None else width,
                height=AUTO if height is None else height,
                text=text,
                # Only an explicit False disables wrapping
                wrap=declared.get("wrap") is not False,
                padding=normalize_padding(declared.get("padding")),
            )
        case _:
            raise InvalidDeclaration(
                f"Invalid {where}: {declared!r}\n"
                f"  Valid formats:\n"
                f"    - string: text-only cell (e.g. 'foo')\n"
                f"    - mapping with any of: {', '.join(sorted(CELL_KEYS))}"
            )


def parse_row(declared: Any, row_idx: int = 0) -> RowDecl:
    """Parse one row declaration: a mapping with 'cells', or a bare sequence of cells."""
    if isinstance(declared, RowDecl):
        cells: Any = declared.cells
    elif isinstance(declared, Mapping):
        _check_keys(declared, ROW_KEYS, f"row {row_idx}")
        cells = declared.get("cells")
    elif _is_sequence(declared):
        cells = declared
    else:
        raise InvalidDeclaration(
            f"Invalid row {row_idx}: {declared!r}\n"
            f"  Expected a sequence of cells or a mapping with 'cells'"
        )

    if not _is_sequence(cells) or len(cells) == 0:
        raise InvalidDeclaration(
            f"Row {row_idx} has no cells\n"
            f"  Every row needs at least one cell"
        )

    return RowDecl(tuple(parse_cell(cell, row_idx, col_idx) for col_idx, cell in enumerate(cells)))


def parse_declaration(declared: Any) -> GridDecl:
    """
    Normalize a grid declaration into a GridDecl.

    Args:
        declared: Mapping with 'rows' (and optionally 'width', 'height',
            'on_update'), a bare sequence of rows, or a GridDecl

    Returns:
        GridDecl with every row and cell in full form

    Raises:
        InvalidDeclaration: If any level of the tree has an unrecognized shape
    """
    if isinstance(declared, GridDecl):
        return declared

    if isinstance(declared, Mapping):
        _check_keys(declared, GRID_KEYS, "grid declaration")
        rows = declared.get("rows")
        width = _viewport_dimension(declared.get("width"), "width")
        height = _viewport_dimension(declared.get("height"), "height")
    elif _is_sequence(declared):
        rows, width, height = declared, None, None
    else:
        raise InvalidDeclaration(
            f"Invalid grid declaration: {declared!r}\n"
            f"  Expected a sequence of rows or a mapping with 'rows'"
        )

    if not _is_sequence(rows):
        raise InvalidDeclaration(
            f"Invalid rows: {rows!r}\n"
            f"  'rows' must be a sequence of row declarations"
        )

    return GridDecl(
        rows=tuple(parse_row(row, row_idx) for row_idx, row in enumerate(rows)),
        width=width,
        height=height,
    )
