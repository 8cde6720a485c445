"""Tests for the TableDocument API."""

import pytest

from tablequill import TableDocument, render_markup_to_pdf
from tablequill.engine.text_metrics import FontSpec
from tablequill.exceptions import FontError, ImageNotFoundError
from tablequill.renderers.page_canvas import TextOp

HEADER = "<table><tr><td>Page {pn}</td></tr></table>"
FOOTER = "<table><tr><td>Footer {pn} of {pc}</td></tr></table>"


def page_texts(doc, number):
    return [op for op in doc.canvas.pages[number - 1].ops if isinstance(op, TextOp)]


class TestTableDocument:
    """Test suite for TableDocument."""

    def test_default_margins(self):
        portrait = TableDocument("P")
        landscape = TableDocument("L")

        assert (portrait.margins.left, portrait.margins.top, portrait.margins.right, portrait.margins.bottom) == (
            20, 10, 10, 10,
        )
        assert (landscape.margins.left, landscape.margins.top, landscape.margins.right) == (10, 20, 10)

    def test_set_margins_defaults(self):
        doc = TableDocument()

        doc.set_margins(15, 12)

        assert (doc.margins.left, doc.margins.top, doc.margins.right, doc.margins.bottom) == (15, 12, 15, 12)

    def test_settings_setters(self):
        doc = TableDocument()

        doc.set_cell_paddings(2, 3)
        doc.set_spacing(1.5)
        doc.set_alias_page_num("[n]")
        doc.set_alias_page_count("[c]")

        assert (doc.settings.h_cell_padding, doc.settings.v_cell_padding) == (2, 3)
        assert doc.settings.line_spacing == 1.5
        assert (doc.settings.page_num_alias, doc.settings.page_count_alias) == ("[n]", "[c]")

    def test_base_line_width_in_user_units(self):
        doc = TableDocument(unit="mm")

        assert doc.settings.base_line_width == pytest.approx(0.2, abs=1e-3)

    def test_first_font_becomes_default(self):
        doc = TableDocument()

        doc.set_font("Times", "B", 9)
        doc.set_font("Courier", "", 14)

        assert doc.settings.default_font == FontSpec("Times", "B", 9)

        doc.set_font("Courier", "I", 0, default=True)

        assert doc.settings.default_font == FontSpec("Courier", "I", 9)

    def test_add_font_missing_file(self, tmp_path):
        with pytest.raises(FontError):
            TableDocument().add_font("Custom", "", tmp_path / "missing.ttf")

    def test_htmltable_opens_first_page(self):
        doc = TableDocument()

        tables = doc.htmltable("<table><tr><td>a</td></tr></table>")

        assert doc.page_no() == 1
        assert len(tables) == 1
        (op,) = page_texts(doc, 1)
        assert op.text == "a"
        assert op.x >= doc.margins.left

    def test_header_and_footer_on_every_page(self):
        doc = TableDocument()
        doc.set_header_footer(HEADER, FOOTER)

        doc.add_page()
        doc.add_page()
        doc.canvas.close()

        for number in (1, 2):
            words = [op.text for op in page_texts(doc, number)]
            assert words[:2] == ["Page", str(number)]
            assert words[2:4] == ["Footer", str(number)]

    def test_header_pushes_content_below_it(self):
        doc = TableDocument()
        doc.set_header_footer(header="<table><tr><td height=\"30\">Header</td></tr></table>")

        doc.add_page()

        assert doc.canvas.y == pytest.approx(30.0)

    def test_footer_at_bottom_margin(self):
        doc = TableDocument()
        doc.set_header_footer(footer=FOOTER)
        doc.add_page()
        bottom = doc.canvas.page_bounds().bottom

        doc.canvas.close()

        footer_ops = page_texts(doc, 1)
        assert footer_ops
        assert all(op.y > bottom for op in footer_ops)

    def test_long_table_paginates(self):
        doc = TableDocument()
        body = "".join(f"<tr><td>row {i}</td></tr>" for i in range(120))

        doc.htmltable(f"<table border=\"1\"><tr repeat><td>Head</td></tr>{body}</table>")

        assert doc.page_no() > 1
        for number in range(1, doc.page_no() + 1):
            assert "Head" in [op.text for op in page_texts(doc, number)]

    def test_output_writes_pdf(self, tmp_path):
        doc = TableDocument()
        doc.set_title("Report")
        doc.set_header_footer(footer=FOOTER)
        doc.htmltable(
            "<table border=\"1\" bgcolor=\"#eeeeee\">"
            "<tr repeat><td style=\"bold\">Name</td><td align=\"right\">Value</td></tr>"
            "<tr><td>Alpha <font color=\"red\" style=\"U\">beta</font></td><td>1</td></tr>"
            "</table>"
        )

        output = doc.output(tmp_path / "report.pdf")

        data = output.read_bytes()
        assert data.startswith(b"%PDF")
        assert doc.canvas.closed is True

    def test_missing_image_propagates(self):
        doc = TableDocument()

        with pytest.raises(ImageNotFoundError):
            doc.htmltable("<table><tr><td><img src=\"/no/such/image.png\"></td></tr></table>")


class TestRenderMarkupToPdf:
    """Test suite for the one-call helper."""

    def test_render_markup_to_pdf(self, tmp_path):
        output = render_markup_to_pdf(
            "<table><tr><td>x</td></tr></table>",
            tmp_path / "one.pdf",
            orientation="L",
            font=FontSpec("Times", "", 10),
            footer=FOOTER,
        )

        assert output.read_bytes().startswith(b"%PDF")
