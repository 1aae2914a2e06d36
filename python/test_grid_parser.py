"""Tests for grid_parser module."""

import pytest

from grid_parser import parse_cell, parse_declaration, parse_row
from grid_types import AUTO, CellDecl, GridDecl, InvalidDeclaration, RowDecl


class TestParseCell:
    """Tests for the cell declaration variants."""

    def test_bare_string(self) -> None:
        """A string is a text-only cell."""
        assert parse_cell("foo") == CellDecl(text="foo")

    def test_full_mapping(self) -> None:
        cell = parse_cell({"width": "50%", "height": 3, "text": "x", "wrap": False, "padding": [1, 2]})
        assert cell == CellDecl(width="50%", height=3, text="x", wrap=False, padding=(1, 2, 1, 2))

    def test_defaults(self) -> None:
        """Omitted sizes are auto, wrap defaults on, no padding."""
        cell = parse_cell({})
        assert cell.width == AUTO
        assert cell.height == AUTO
        assert cell.text == ""
        assert cell.wrap is True
        assert cell.padding == (0, 0, 0, 0)

    def test_explicit_zero_is_not_auto(self) -> None:
        assert parse_cell({"width": 0}).width == 0

    def test_only_false_disables_wrap(self) -> None:
        assert parse_cell({"wrap": None}).wrap is True
        assert parse_cell({"wrap": False}).wrap is False

    def test_none_text_is_empty(self) -> None:
        assert parse_cell({"text": None}).text == ""

    def test_parsed_cell_passthrough(self) -> None:
        decl = CellDecl(text="already")
        assert parse_cell(decl) is decl

    def test_error_unknown_option(self) -> None:
        with pytest.raises(InvalidDeclaration, match="Unknown option"):
            parse_cell({"txt": "typo"}, 2, 3)

    def test_error_non_string_text(self) -> None:
        with pytest.raises(InvalidDeclaration, match="row 0, column 1"):
            parse_cell({"text": 42}, 0, 1)

    def test_error_wrong_type(self) -> None:
        with pytest.raises(InvalidDeclaration, match="Invalid cell"):
            parse_cell(42)


class TestParseRow:
    """Tests for the row declaration variants."""

    def test_bare_sequence(self) -> None:
        assert parse_row(["a", "b"]) == RowDecl((CellDecl(text="a"), CellDecl(text="b")))

    def test_mapping_with_cells(self) -> None:
        assert parse_row({"cells": ["a"]}) == RowDecl((CellDecl(text="a"),))

    def test_tuple_of_cells(self) -> None:
        assert len(parse_row(("a", {"text": "b"})).cells) == 2

    def test_error_empty_row(self) -> None:
        with pytest.raises(InvalidDeclaration, match="Row 4 has no cells"):
            parse_row([], 4)

    def test_error_missing_cells(self) -> None:
        with pytest.raises(InvalidDeclaration, match="has no cells"):
            parse_row({})

    def test_error_string_row(self) -> None:
        """A string where a row is expected is not a sequence of cells."""
        with pytest.raises(InvalidDeclaration, match="Invalid row"):
            parse_row("abc")


class TestParseDeclaration:
    """Tests for whole-grid declarations."""

    def test_mapping(self) -> None:
        decl = parse_declaration({"width": 10, "height": 2, "rows": [["a"], {"cells": ["b"]}]})
        assert decl == GridDecl(
            rows=(RowDecl((CellDecl(text="a"),)), RowDecl((CellDecl(text="b"),))),
            width=10,
            height=2,
        )

    def test_bare_sequence_of_rows(self) -> None:
        decl = parse_declaration([["a", "b"], ["c"]])
        assert [len(row.cells) for row in decl.rows] == [2, 1]
        assert decl.width is None
        assert decl.height is None

    def test_on_update_option_accepted(self) -> None:
        decl = parse_declaration({"rows": [["a"]], "on_update": print})
        assert len(decl.rows) == 1

    def test_parsed_declaration_passthrough(self) -> None:
        decl = GridDecl(rows=(RowDecl((CellDecl(),)),))
        assert parse_declaration(decl) is decl

    def test_error_bad_viewport(self) -> None:
        with pytest.raises(InvalidDeclaration, match="viewport width"):
            parse_declaration({"width": -1, "rows": [["a"]]})
        with pytest.raises(InvalidDeclaration, match="viewport height"):
            parse_declaration({"height": "10", "rows": [["a"]]})

    def test_error_missing_rows(self) -> None:
        with pytest.raises(InvalidDeclaration, match="Invalid rows"):
            parse_declaration({"width": 10})

    def test_error_not_a_declaration(self) -> None:
        with pytest.raises(InvalidDeclaration, match="Invalid grid declaration"):
            parse_declaration("rows")

    def test_error_unknown_grid_option(self) -> None:
        with pytest.raises(InvalidDeclaration, match="'colour'"):
            parse_declaration({"rows": [["a"]], "colour": "red"})
