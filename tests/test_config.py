"""Tests for configuration, attribute helpers, fonts and utilities."""

import logging

import pytest

from tablequill import engine
from tablequill.config import LayoutSettings, PageSetup, normalize_orientation
from tablequill.engine.fonts import normalize_style, resolve_font_name
from tablequill.engine.geometry import Margins, PageBounds
from tablequill.engine.text_metrics import FontSpec, TextMetricsEngine
from tablequill.exceptions import TableQuillError
from tablequill.parser.attributes import (
    calc_width,
    normalize_align,
    normalize_valign,
    parse_font_style,
    resolve_attribute,
    to_float,
    to_int,
)
from tablequill.utils.color_utils import to_color
from tablequill.utils.logger import configure_logging


def rgb255(color):
    return tuple(round(channel * 255) for channel in color.rgb())


class TestPageSetup:
    """Test suite for PageSetup."""

    @pytest.mark.parametrize("value, expected", [
        ("P", "P"), ("portrait", "P"), ("l", "L"), ("Landscape", "L"), (None, "P"),
    ])
    def test_normalize_orientation(self, value, expected):
        assert normalize_orientation(value) == expected

    def test_invalid_orientation(self):
        with pytest.raises(ValueError):
            normalize_orientation("diagonal")

    def test_a4_in_millimetres(self):
        setup = PageSetup()

        size = setup.page_size()
        assert size.width == pytest.approx(210.0, abs=0.01)
        assert size.height == pytest.approx(297.0, abs=0.01)
        landscape = setup.page_size("L")
        assert (landscape.width, landscape.height) == (size.height, size.width)

    def test_custom_size_in_user_units(self):
        setup = PageSetup(unit="pt", size=(300, 100))

        assert setup.portrait_size().width == 100
        assert setup.portrait_size().height == 300

    def test_unknown_unit_and_size(self):
        with pytest.raises(ValueError):
            PageSetup(unit="furlong")
        with pytest.raises(ValueError):
            PageSetup(size="B9").page_size()

    def test_page_bounds_and_engine_exports(self):
        bounds = PageBounds(left=20, top=10, right=200, bottom=287)

        assert (bounds.width, bounds.height) == (180, 277)
        assert Margins.uniform(5) == Margins(5, 5, 5, 5)
        assert set(engine.__all__) >= {"Margins", "PageBounds", "Size"}
        assert "Rect" not in engine.__all__

    def test_layout_defaults(self):
        settings = LayoutSettings()

        assert (settings.h_cell_padding, settings.v_cell_padding, settings.line_spacing) == (1, 1, 1)
        assert settings.default_font == FontSpec("Helvetica", "", 12)
        assert (settings.page_num_alias, settings.page_count_alias) == ("{pn}", "{pc}")


class TestAttributes:
    """Test suite for markup attribute helpers."""

    @pytest.mark.parametrize("value, expected", [
        ("12px", 12.0), ("1.5", 1.5), (" 7", 7.0), ("abc", 0.0), (None, 0.0), (3, 3.0), ("-2pt", -2.0),
    ])
    def test_to_float(self, value, expected):
        assert to_float(value) == expected

    def test_to_int_truncates(self):
        assert to_int("3.9") == 3

    def test_alignments(self):
        assert normalize_align("CENTER") == "center"
        assert normalize_align("justify") == "justify"
        assert normalize_align(None) == "left"
        assert normalize_valign("Middle") == "middle"
        assert normalize_valign("baseline") == "top"

    def test_font_style(self):
        assert parse_font_style("bold, italic") == "BI"
        assert parse_font_style("u") == "U"
        assert parse_font_style("") == ""

    def test_calc_width(self):
        assert calc_width("25%", 200) == 50
        assert calc_width("40", 200) == 40

    def test_resolve_attribute_layers(self):
        cell, row, table = {"a": "1"}, {"a": "2", "b": "3"}, {"c": "4"}

        assert resolve_attribute("a", cell, row, table) == "1"
        assert resolve_attribute("b", cell, row, table) == "3"
        assert resolve_attribute("c", cell, row, table) == "4"
        assert resolve_attribute("d", cell, row, table, default="x") == "x"
        assert resolve_attribute("a", None, row) == "2"


class TestFonts:
    """Test suite for font resolution and metrics."""

    def test_normalize_style(self):
        assert normalize_style("ub") == "BU"
        assert normalize_style(None) == ""

    @pytest.mark.parametrize("family, style, expected", [
        ("Helvetica", "", "Helvetica"),
        ("arial", "B", "Helvetica-Bold"),
        ("Times", "I", "Times-Italic"),
        ("courier", "BIU", "Courier-BoldOblique"),
        ("Unknown Sans", "", "Helvetica"),
        (None, "", "Helvetica"),
    ])
    def test_resolve_font_name(self, family, style, expected):
        assert resolve_font_name(family, style) == expected

    def test_font_spec_merge(self):
        base = FontSpec("Helvetica", "", 12)

        assert base.merged(size=0) == base
        assert base.merged("Times", "B", 8) == FontSpec("Times", "B", 8)
        assert base.merged(style="U").underline is True

    def test_metrics_scale_to_user_units(self):
        font = FontSpec("Courier", "", 10)
        points = TextMetricsEngine(1.0)
        millimetres = TextMetricsEngine(72 / 25.4)

        assert points.measure_text("abc", font) == pytest.approx(18.0)
        assert millimetres.measure_text("abc", font) == pytest.approx(18.0 * 25.4 / 72)
        assert points.get_line_height(font) == 10
        assert points.measure_text("", font) == 0


class TestUtils:
    """Test suite for colors, errors and logging setup."""

    def test_colors(self):
        assert rgb255(to_color("#ff8000")) == (255, 128, 0)
        assert rgb255(to_color("ff8000")) == (255, 128, 0)
        assert rgb255(to_color("#f00")) == (255, 0, 0)
        assert rgb255(to_color("Navy")) == (0, 0, 128)
        assert rgb255(to_color("nonsense")) == (0, 0, 0)
        assert rgb255(to_color(None, fallback="#010203")) == (1, 2, 3)

    def test_error_message_with_details(self):
        assert str(TableQuillError("Failed", "details")) == "Failed: details"
        assert str(TableQuillError("Failed")) == "Failed"

    def test_configure_logging(self):
        root_logger = logging.getLogger()
        saved = list(root_logger.handlers)
        try:
            configure_logging("DEBUG", rich_output=False)
            assert root_logger.level == logging.DEBUG
            assert len(root_logger.handlers) == 1

            configure_logging("INFO")
            assert type(root_logger.handlers[0]).__name__ == "RichHandler"
        finally:
            root_logger.handlers[:] = saved
            root_logger.setLevel(logging.WARNING)

    def test_configure_logging_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")
