"""
Tests for cell specs, table style defaults and style resolution.
"""

import pytest

from table_layout.styles import CellSpec, TableStyle, get_bold_font, is_empty_text, pick


class TestPick:
    """Tiered lookup keeps falsy values that are set."""

    def test_first_non_none_wins(self):
        assert pick(None, "b", "c") == "b"

    def test_falsy_values_are_not_skipped(self):
        assert pick(0, 14) == 0
        assert pick(False, True) is False
        assert pick("", "none") == ""

    def test_all_none(self):
        assert pick(None, None) is None


class TestCellSpec:

    def test_from_string(self):
        assert CellSpec.from_dict("Billy") == CellSpec(text="Billy")

    def test_from_none(self):
        assert CellSpec.from_dict(None) == CellSpec()

    def test_from_dict_accepts_camel_case(self):
        spec = CellSpec.from_dict({
            "text": "Name",
            "fontSize": 10,
            "borderStyle": "none",
            "emptyText": "-",
            "unknown": 1,
        })
        assert spec.font_size == 10
        assert spec.border_style == "none"
        assert spec.empty_text == "-"

    def test_is_empty_text(self):
        assert is_empty_text(None)
        assert is_empty_text("")
        assert not is_empty_text(" ")


class TestTableStyle:

    def test_hard_defaults(self):
        style = TableStyle()
        assert style.cell_font == "Helvetica"
        assert style.header_font == "Helvetica-Bold"
        assert style.cell_font_size == 14
        assert style.header_border_width == 1.5
        assert style.cell_empty_text == "none"

    def test_empty_variant_follows_overridden_defaults(self):
        style = TableStyle.from_options({"cellFontSize": 9, "header_italic": True})
        assert style.cell_empty_font_size == 9
        assert style.header_empty_italic is True

    def test_explicit_empty_variant_kept(self):
        style = TableStyle(cell_font_size=9, cell_empty_font_size=6)
        assert style.cell_empty_font_size == 6

    def test_is_immutable(self):
        style = TableStyle()
        with pytest.raises(AttributeError):
            style.cell_font_size = 10

    def test_none_options_keep_defaults(self):
        style = TableStyle.from_options({"cell_color": None, "bogus": 3})
        assert style.cell_color == "#222"


class TestResolution:

    def test_cell_override_beats_table_default(self):
        style = TableStyle(cell_color="#333")
        resolved = style.resolve_cell(CellSpec(text="x", color="#f00"))
        assert resolved.color == "#f00"

    def test_table_default_used_when_unset(self):
        style = TableStyle(cell_color="#333")
        assert style.resolve_cell(CellSpec(text="x")).color == "#333"

    def test_zero_font_size_override_honored(self):
        resolved = TableStyle().resolve_cell(CellSpec(text="x", font_size=0))
        assert resolved.font_size == 0
        assert resolved.line_gap == 0

    def test_false_italic_override_honored(self):
        style = TableStyle(cell_italic=True)
        assert style.resolve_cell(CellSpec(text="x", italic=False)).italic is False

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_text_uses_empty_variant(self, text):
        style = TableStyle(
            cell_empty_color="#eee", cell_empty_font_size=8,
            cell_empty_italic=True, cell_empty_text="n/a",
        )
        resolved = style.resolve_cell(CellSpec(text=text, color="#f00", font_size=20))
        assert resolved.color == "#eee"
        assert resolved.font_size == 8
        assert resolved.italic is True
        assert resolved.text == "n/a"

    def test_cell_empty_overrides_beat_table_empty_defaults(self):
        resolved = TableStyle().resolve_header(CellSpec(empty_text="?", empty_color="#123"))
        assert resolved.text == "?"
        assert resolved.color == "#123"

    def test_header_line_gap(self):
        style = TableStyle(header_font_size=10)
        assert style.resolve_header(CellSpec(text="H")).line_gap == pytest.approx(12.0)
        assert style.resolve_header(CellSpec(text="H", font_size=20)).line_gap == pytest.approx(24.0)

    def test_row_line_gap(self):
        style = TableStyle(cell_font_size=10)
        assert style.resolve_cell(CellSpec(text="r")).line_gap == pytest.approx(10.7)

    def test_header_uses_header_defaults(self):
        resolved = TableStyle().resolve_header(CellSpec(text="H"))
        assert resolved.font == "Helvetica-Bold"
        assert resolved.border_color == "#000"
        assert resolved.border_width == 1.5


class TestBoldFont:

    def test_variants(self):
        assert get_bold_font("Helvetica") == "Helvetica-Bold"
        assert get_bold_font("Times-Roman") == "Times-Bold"
        assert get_bold_font("Courier") == "Courier-Bold"
        assert get_bold_font("Helvetica-Bold") == "Helvetica-Bold"


class TestNumericText:

    def test_numbers_become_strings(self):
        spec = CellSpec.from_dict({"text": 42, "emptyText": 0})
        assert spec.text == "42"
        assert spec.empty_text == "0"

    def test_numeric_text_is_not_empty(self):
        resolved = TableStyle().resolve_cell(CellSpec.from_dict({"text": 1.5}))
        assert resolved.text == "1.5"
