"""Tests for the recording page canvas and the ReportLab PDF renderer."""

import pytest
from unittest.mock import MagicMock, Mock, call

from tablequill.config import PageSetup
from tablequill.engine.geometry import Margins, Size
from tablequill.engine.text_metrics import FontSpec
from tablequill.exceptions import RenderingError
from tablequill.renderers.page_canvas import (
    FillRectOp,
    LineOp,
    PageCanvas,
    RecordedPage,
    StrokeRectOp,
    TextOp,
)
from tablequill.renderers.pdf_renderer import BASELINE_OFFSET, PDFRenderer

FONT = FontSpec("Helvetica", "", 10)


class TestPageCanvas:
    """Test suite for PageCanvas."""

    def test_starts_without_pages(self, page_setup, metrics):
        canvas = PageCanvas(page_setup, metrics)

        assert canvas.page_number == 0
        with pytest.raises(RenderingError):
            canvas.fill_rect(0, 0, 10, 10, "#000000")

    def test_advance_page_resets_cursor(self, metrics):
        setup = PageSetup(unit="pt", size=(100, 200), margins=Margins(top=7, bottom=5, left=3, right=4))
        canvas = PageCanvas(setup, metrics)

        canvas.advance_page()
        canvas.x, canvas.y = 50, 60
        canvas.advance_page("L")

        assert canvas.page_number == 2
        assert (canvas.x, canvas.y) == (3, 7)
        assert canvas.orientation == "L"
        assert canvas.pages[1].size == Size(200, 100)

    def test_page_bounds(self, metrics):
        setup = PageSetup(unit="pt", size=(100, 200), margins=Margins(top=7, bottom=5, left=3, right=4))
        canvas = PageCanvas(setup, metrics)
        canvas.advance_page()

        bounds = canvas.page_bounds()

        assert (bounds.left, bounds.top, bounds.right, bounds.bottom) == (3, 7, 96, 195)
        assert bounds.width == 93
        assert bounds.height == 188

    def test_page_hooks(self, page_setup, metrics):
        canvas = PageCanvas(page_setup, metrics)
        events = Mock()
        canvas.on_page_start = events.start
        canvas.on_page_end = events.end

        canvas.advance_page()
        canvas.advance_page()
        canvas.close()
        canvas.close()

        assert events.mock_calls == [call.start(), call.end(), call.start(), call.end()]

    def test_closed_canvas_rejects_pages(self, canvas):
        canvas.close()

        with pytest.raises(RenderingError):
            canvas.advance_page()

    def test_records_operations(self, canvas):
        canvas.draw_text_run(1, 2, "a", FONT, "#ff0000")
        canvas.fill_rect(0, 0, 5, 5, "red")
        canvas.stroke_rect(0, 0, 5, 5, weight=2)
        canvas.stroke_line(0, 0, 5, 0)

        assert canvas.pages[0].ops == [
            TextOp(1, 2, "a", FONT, "#ff0000"),
            FillRectOp(0, 0, 5, 5, "red"),
            StrokeRectOp(0, 0, 5, 5, 2),
            LineOp(0, 0, 5, 0),
        ]

    def test_measures_through_metrics(self, canvas):
        assert canvas.measure_word_width("abc", FONT) == 30
        assert canvas.line_height(FONT) == 10


class TestPDFRenderer:
    """Test suite for PDFRenderer."""

    def _page(self, *ops):
        return RecordedPage(number=1, orientation="P", size=Size(100, 200), ops=list(ops))

    def test_render_requires_pages(self, tmp_path):
        with pytest.raises(RenderingError):
            PDFRenderer(scale=1.0).render([], tmp_path / "empty.pdf")

    def test_writes_pdf_file(self, tmp_path):
        page = self._page(
            FillRectOp(10, 10, 50, 20, "#eeeeee"),
            StrokeRectOp(10, 10, 50, 20, 2),
            LineOp(10, 40, 60, 40),
            TextOp(12, 20, "Hello", FontSpec("Helvetica", "BU", 10), "navy"),
        )

        output = PDFRenderer(scale=1.0, title="Test").render([page, page], tmp_path / "out.pdf")

        assert output.exists()
        assert output.read_bytes().startswith(b"%PDF")

    def test_text_coordinates_are_flipped(self):
        c = MagicMock()
        renderer = PDFRenderer(scale=2.0)

        renderer._draw_text(c, TextOp(5, 10, "x", FONT), page_height_pt=400, page_count="1")

        c.setFont.assert_called_once_with("Helvetica", 10)
        c.drawString.assert_called_once_with(10.0, 400 - 20 - BASELINE_OFFSET * 10, "x")

    def test_page_count_placeholder(self):
        c = MagicMock()
        renderer = PDFRenderer(scale=1.0, page_count_alias="{pc}")

        renderer._draw_text(c, TextOp(0, 0, "{pc}", FONT), page_height_pt=100, page_count="7")

        assert c.drawString.call_args[0][2] == "7"

    def test_underline_draws_a_line(self):
        c = MagicMock()
        renderer = PDFRenderer(scale=1.0)

        renderer._draw_text(c, TextOp(0, 50, "ab", FontSpec("Helvetica", "U", 10)), page_height_pt=100, page_count="1")

        c.line.assert_called_once()

    def test_colors(self):
        renderer = PDFRenderer(scale=1.0)

        assert renderer._color("#ff0000").rgb() == (1.0, 0.0, 0.0)
        assert renderer._color("white").rgb() == (1.0, 1.0, 1.0)
        assert renderer._color(None).rgb() == (0.0, 0.0, 0.0)
