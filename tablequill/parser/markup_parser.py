"""
Markup parser - builds a Table model from one ``<table>`` block.

Handles:
- the closed tag set ``table``, ``tr``, ``td``, ``font``, ``img``, ``br``
- slot allocation around rowspan/colspan placeholders
- cell attribute inheritance (cell -> row -> table -> built-in default)
- measuring text into font runs through the text flow
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser
from typing import Callable, Dict, List, Optional, Tuple

from ..config import LayoutSettings
from ..engine.table_model import Cell, Column, FontRun, ImageRef, Placeholder, Row, Slot, Table
from ..engine.text_flow import TextFlow, TextMeasurer
from ..exceptions import ParsingError
from ..media.image_probe import ImageInfo, probe_image, scaled_image_size
from .attributes import (
    ROW_INHERITED,
    calc_width,
    normalize_align,
    normalize_valign,
    parse_font_style,
    resolve_attribute,
    to_float,
    to_int,
)

logger = logging.getLogger(__name__)

Attrs = Dict[str, Optional[str]]
ImageProbe = Callable[[str], ImageInfo]

# Tags whose end closes an open font run
_FONT_CLOSERS = ("table", "tr", "td", "font")
# Tags whose end closes an open cell
_CELL_CLOSERS = ("table", "tr", "td")


class TableMarkupParser(HTMLParser):
    """HTML parser that turns one table block into a :class:`Table`."""

    def __init__(
        self,
        measurer: TextMeasurer,
        settings: LayoutSettings,
        available_width: float,
        image_probe: ImageProbe = probe_image,
    ):
        super().__init__(convert_charrefs=True)
        self.settings = settings
        self.available_width = available_width
        self.image_probe = image_probe
        self.text_flow = TextFlow(measurer, settings.default_font)

        self.table = Table()
        self.table_attrs: Attrs = {}
        self.rows: List[Row] = []
        self.slots: Dict[Tuple[int, int], Slot] = {}
        self.n_cols = 0
        self.row = -1
        self.col = -1
        self.current_cell: Optional[Cell] = None
        self.font_open = False
        self.td_open = False

    # ------------------------------------------------------------------
    # HTMLParser callbacks
    # ------------------------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list) -> None:
        attributes: Attrs = {name.lower(): value for name, value in attrs}
        if tag == "table":
            self._start_table(attributes)
        elif tag == "tr":
            self._start_row(attributes)
        elif tag == "td":
            self._start_cell(attributes)
        elif tag == "font":
            self._start_font(attributes)
        elif tag == "img":
            self._add_image(attributes)
        elif tag == "br":
            if self.current_cell is not None:
                self.text_flow.append_break(self.current_cell.runs[-1])

    def handle_endtag(self, tag: str) -> None:
        if self.font_open and tag in _FONT_CLOSERS:
            self.font_open = False
        if self.td_open and tag in _CELL_CLOSERS:
            self.td_open = False
            self.current_cell = None

    def handle_data(self, data: str) -> None:
        cell = self.current_cell
        if cell is None or not self.td_open:
            return
        if not self.font_open:
            # text after a closing font tag goes to a run on the document default font
            cell.runs.append(FontRun())
            self.font_open = True
        self.text_flow.append_text(cell.runs[-1], data, nowrap=cell.nowrap)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def _start_table(self, attrs: Attrs) -> None:
        self.td_open = False
        self.current_cell = None
        self.table_attrs = attrs
        table = self.table
        if "width" in attrs:
            table.width = calc_width(attrs["width"], self.available_width)
        if "align" in attrs:
            table.align = normalize_align(attrs["align"])
        table.border = attrs.get("border") or "0"
        table.bgcolor = attrs.get("bgcolor")
        table.nobreak = "nobreak" in attrs

    def _start_row(self, attrs: Attrs) -> None:
        self.td_open = False
        self.current_cell = None
        self.row += 1
        self.col = -1
        row = Row(index=self.row)
        row.attrs = {name: attrs[name] for name in ROW_INHERITED if name in attrs}
        row.bgcolor = attrs.get("bgcolor")
        if "repeat" in attrs:
            row.repeat = True
            self.table.repeat.append(self.row)
        else:
            row.page_break_before = "pbr" in attrs
            row.keep_with_next = "knext" in attrs
        self.rows.append(row)

    def _start_cell(self, attrs: Attrs) -> None:
        if self.row < 0:
            # cell outside of any row opens an implicit one
            self._start_row({})

        self.col += 1
        while (self.row, self.col) in self.slots:
            self.col += 1
        self.n_cols = max(self.n_cols, self.col + 1)

        row_attrs = self.rows[self.row].attrs
        cell = self._build_cell(attrs, row_attrs)
        self.slots[(self.row, self.col)] = cell
        for r in range(self.row, self.row + cell.rowspan):
            for c in range(self.col, self.col + cell.colspan):
                if (r, c) != (self.row, self.col):
                    self.slots[(r, c)] = Placeholder(self.row, self.col)

        self.current_cell = cell
        self.td_open = True
        self.font_open = True

    def _start_font(self, attrs: Attrs) -> None:
        if self.current_cell is None:
            return
        run = FontRun()
        if "size" in attrs:
            run.size = to_float(attrs["size"])
        if "family" in attrs:
            run.family = attrs["family"]
        if "style" in attrs:
            run.style = parse_font_style(attrs["style"])
        if "color" in attrs:
            run.color = attrs["color"]
        self.current_cell.runs.append(run)
        self.font_open = True

    def _add_image(self, attrs: Attrs) -> None:
        cell = self.current_cell
        src = attrs.get("src")
        if cell is None or not src:
            return
        info = self.image_probe(src)
        width = to_float(attrs["width"]) if "width" in attrs else None
        height = to_float(attrs["height"]) if "height" in attrs else None
        w, h = scaled_image_size(info, width, height)
        cell.image = ImageRef(path=src, width=float(w), height=float(h))
        cell.width = float(w)
        cell.height = float(h)
        logger.debug("Image cell (%s, %s): %s at %sx%s", cell.row, cell.col, src, w, h)

    # ------------------------------------------------------------------
    # Cell construction
    # ------------------------------------------------------------------

    def _build_cell(self, attrs: Attrs, row_attrs: Attrs) -> Cell:
        settings = self.settings
        cell = Cell(row=self.row, col=self.col)

        def lookup(name: str, default=None):
            return resolve_attribute(name, attrs, row_attrs, default=default)

        width = lookup("width")
        if width is not None:
            cell.width = calc_width(width, self.available_width)
        height = lookup("height")
        if height is not None:
            cell.height = to_float(height)
        flex = lookup("flex")
        if flex is not None:
            cell.flex = to_float(flex)

        cell.align = normalize_align(lookup("align"))
        cell.valign = normalize_valign(lookup("valign"))
        cell.border = resolve_attribute("border", attrs, row_attrs, self.table_attrs, default="0") or "0"
        cell.bgcolor = attrs.get("bgcolor")

        cell.colspan = max(1, to_int(lookup("colspan", 1), 1))
        cell.rowspan = max(1, to_int(lookup("rowspan", 1), 1))
        cell.nowrap = "nowrap" in attrs

        cell.h_padding = to_float(lookup("hpad", settings.h_cell_padding))
        cell.v_padding = to_float(lookup("vpad", settings.v_cell_padding))
        cell.line_spacing = to_float(lookup("lh", settings.line_spacing))

        cell.runs.append(self._cell_font_run(attrs, row_attrs))
        return cell

    @staticmethod
    def _cell_font_run(attrs: Attrs, row_attrs: Attrs) -> FontRun:
        """Run carrying the cell's own font attributes (cell, then row)."""
        run = FontRun()
        size = resolve_attribute("size", attrs, row_attrs)
        if size is not None:
            run.size = to_float(size)
        run.family = resolve_attribute("family", attrs, row_attrs)
        style = resolve_attribute("style", attrs, row_attrs)
        if style is not None:
            run.style = parse_font_style(style)
        run.color = resolve_attribute("color", attrs, row_attrs)
        return run

    # ------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------

    def build(self) -> Table:
        """Finalize the grid: clamp spans and materialize rows and columns."""
        table = self.table
        n_rows = len(self.rows)
        n_cols = self.n_cols
        grid: List[List[Slot]] = [[None] * n_cols for _ in range(n_rows)]

        for (r, c), slot in self.slots.items():
            if r >= n_rows or c >= n_cols:
                continue
            if isinstance(slot, Cell):
                slot.rowspan = min(slot.rowspan, n_rows - r)
                slot.colspan = min(slot.colspan, n_cols - c)
            grid[r][c] = slot

        table.rows = self.rows
        table.columns = [Column() for _ in range(n_cols)]
        table.grid = grid
        table.repeat = [index for index in table.repeat if index < n_rows]
        return table


def parse_table(
    markup: str,
    measurer: TextMeasurer,
    settings: LayoutSettings,
    available_width: float,
    image_probe: ImageProbe = probe_image,
) -> Table:
    """

    Parse the markup of one table block.

    Args:
        markup: Markup starting with ``<table``
        measurer: Word width / line height capability
        settings: Document layout defaults
        available_width: Page content width, the base of percentage widths
        image_probe: Callable returning size and resolution of an image

    Returns:
        Table with rows, columns, grid and measured font runs

    """
    if not markup.lstrip().lower().startswith("<table"):
        raise ParsingError("Table block must start with <table", markup[:40])
    parser = TableMarkupParser(measurer, settings, available_width, image_probe)
    parser.feed(markup)
    parser.close()
    table = parser.build()
    logger.debug("Parsed table: %s rows x %s columns", table.n_rows, table.n_cols)
    return table
