"""Tests for pi.datatable.options and pi.datatable.style."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pi.datatable.cell import Alignment
from pi.datatable.errors import ConfigurationError
from pi.datatable.options import TableOptions, load_options
from pi.datatable.style import SIMPLE, BorderStyle, TableStyle


# ---------------------------------------------------------------------------
# TableOptions
# ---------------------------------------------------------------------------


class TestTableOptions:
    def test_defaults(self) -> None:
        options = TableOptions()
        assert options.border_style is BorderStyle.EXTENDED
        assert options.show_header_separator is True
        assert options.cell_padding == 1
        assert options.default_alignment is Alignment.LEFT
        assert options.separate_rows is False
        assert options.expand is False

    def test_camel_case_aliases(self) -> None:
        options = TableOptions.model_validate({"borderStyle": "thin", "cellPadding": 0})
        assert options.border_style is BorderStyle.THIN
        assert options.cell_padding == 0

    def test_frozen(self) -> None:
        options = TableOptions()
        with pytest.raises(Exception):
            options.cell_padding = 3  # type: ignore[misc]

    def test_overhead(self) -> None:
        # three vertical borders plus one space each side of two cells
        assert TableOptions().overhead(2) == 7
        assert TableOptions(border_style="blank").overhead(2) == 4
        assert TableOptions().overhead(0) == 0

    def test_merged_ignores_none(self) -> None:
        options = TableOptions(cell_padding=2).merged(cell_padding=None, separate_rows=True)
        assert options.cell_padding == 2
        assert options.separate_rows is True

    def test_merged_validates(self) -> None:
        with pytest.raises(ConfigurationError):
            TableOptions().merged(cell_padding=-1)


class TestLoadOptions:
    """Options from mappings, JSON strings and files."""

    def test_none_gives_defaults(self) -> None:
        assert load_options(None) == TableOptions()

    def test_instance_passes_through(self) -> None:
        options = TableOptions(expand=True)
        assert load_options(options) is options

    def test_json_string(self) -> None:
        assert load_options('{"separateRows": true}').separate_rows is True

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "table.json"
        path.write_text(json.dumps({"border_style": "rounded", "defaultAlignment": "center"}))
        options = load_options(path)
        assert options.border_style is BorderStyle.ROUNDED
        assert options.default_alignment is Alignment.CENTER

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_options(tmp_path / "missing.json")

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid options JSON"):
            load_options("{not json")

    def test_not_an_object(self) -> None:
        with pytest.raises(ConfigurationError):
            load_options("[1, 2]")

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid table options"):
            load_options({"colour": "red"})

    def test_unknown_style(self) -> None:
        with pytest.raises(ConfigurationError, match="borderStyle|border_style"):
            load_options({"borderStyle": "dotted"})

    def test_negative_padding(self) -> None:
        with pytest.raises(ConfigurationError):
            load_options({"cellPadding": -1})

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            load_options({"cellPadding": "wide"})


# ---------------------------------------------------------------------------
# Border styles
# ---------------------------------------------------------------------------


class TestBorderStyle:
    @pytest.mark.parametrize("style", list(BorderStyle))
    def test_every_preset_resolves(self, style: BorderStyle) -> None:
        assert isinstance(style.glyphs, TableStyle)

    def test_simple_glyphs(self) -> None:
        assert BorderStyle.SIMPLE.glyphs is SIMPLE
        assert SIMPLE.vertical == "|"
        assert SIMPLE.horizontal == "-"

    def test_blank_has_no_rules(self) -> None:
        assert not BorderStyle.BLANK.glyphs.has_rules
        assert BorderStyle.BLANK.glyphs.border_width == 0

    def test_mismatched_glyph_widths_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            TableStyle("++", "+", "+", "+", "+", "+", "+", "+", "+", "|", "-")

    def test_wide_horizontal_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            TableStyle("+", "+", "+", "+", "+", "+", "+", "+", "+", "|", "--")
