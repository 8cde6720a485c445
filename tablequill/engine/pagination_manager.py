"""

Table writer - places resolved rows onto pages.

Handles:
- landscape switch for tables wider than a portrait page
- table alignment on the page
- page breaks: overflowing rows, ``pbr`` rows, ``knext`` chains
- repeated header rows after every break
- the red marker for rows that cannot fit on any page
- border queue, flushed before each break and at the end of the table

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Set

from .cell_renderer import CellRenderer
from .table_model import Table
from .text_metrics import FontSpec

logger = logging.getLogger(__name__)

OVERSIZED_ROW_MESSAGE = "Height of this row is greater than page height!"
OVERSIZED_ROW_COLOR = "#ff0000"
# Tolerance before a wide table moves to a landscape page
LANDSCAPE_TOLERANCE = 5.0


@dataclass(slots=True)
class QueuedBorder:
    x: float
    y: float
    width: float
    height: float
    spec: str


class TableWriter:
    """Writes one laid out table at the surface cursor."""

    def __init__(self, surface, default_font: FontSpec):
        self.surface = surface
        self.default_font = default_font
        self.cell_renderer = CellRenderer(surface, default_font)

        self.table: Table = Table()
        self.x0 = 0.0
        self.last_y = 0.0
        self._borders: List[QueuedBorder] = []
        self._grouped: Set[int] = set()

    def write(self, table: Table) -> None:
        surface = self.surface
        self.table = table
        self._borders = []
        self._grouped = set()

        bounds = surface.page_bounds()
        table_width = table.width or 0.0
        if (
            table.multipage
            and surface.orientation == "P"
            and table_width > bounds.width + LANDSCAPE_TOLERANCE
        ):
            logger.debug("Table width %.2f exceeds page, switching to landscape", table_width)
            surface.advance_page("L")
            bounds = surface.page_bounds()

        x0 = surface.x
        if table.align == "center":
            x0 += ((bounds.right - x0) - table_width) / 2
        elif table.align == "right":
            x0 = bounds.right - table_width
        self.x0 = x0

        if table.nobreak and table.multipage and table.total_height + surface.y > bounds.bottom:
            surface.advance_page(surface.orientation)
        self.last_y = surface.y

        for index in range(table.n_rows):
            self.write_row(index)

        self.flush_borders()
        surface.x = self.x0
        surface.y = self.last_y

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def block_height(self, index: int) -> float:
        """Height of the tallest cell box starting in row ``index``."""
        return max((cell.box_height for cell in self.table.cells_in_row(index)), default=0.0)

    def write_row(self, index: int) -> None:
        table = self.table
        if table.multipage:
            bounds = self.surface.page_bounds()
            height = self.block_height(index)
            row = table.rows[index]
            new_page = False

            if self.last_y + height > bounds.bottom:
                if height + table.repeat_height > bounds.height:
                    self.mark_oversized_row(index)
                    return
                new_page = True
            elif row.page_break_before:
                new_page = True
            elif row.keep_with_next and index not in self._grouped:
                new_page = self._group_needs_break(index)

            if new_page:
                self.break_page(index)

        self.place_row(index)

    def _group_needs_break(self, index: int) -> bool:
        """Whether the keep-together group starting at ``index`` crosses the bottom."""
        table = self.table
        bounds = self.surface.page_bounds()
        height = self.block_height(index)
        for follower in range(index + 1, table.n_rows):
            self._grouped.add(follower)
            height += self.block_height(follower)
            if not table.rows[follower].keep_with_next:
                break

        if height + table.repeat_height > bounds.height:
            logger.warning(
                "Rows kept together from row %s are taller than a page (%.2f), ignoring knext",
                index,
                height,
            )
            return False
        return self.last_y + height > bounds.bottom

    def place_row(self, index: int) -> None:
        """Render the cells starting in row ``index`` and advance the cursor."""
        table = self.table
        row = table.rows[index]
        for cell in table.cells_in_row(index):
            x = self.x0 + cell.x
            self.cell_renderer.render(table, row, cell, x, self.last_y)
            spec = self.cell_renderer.border_spec(cell, table)
            if spec:
                self._borders.append(QueuedBorder(x, self.last_y, cell.box_width, cell.box_height, spec))
        self.last_y += row.height
        self.surface.y = self.last_y

    def break_page(self, index: int) -> None:
        """Start a new page before row ``index`` and repeat the header rows."""
        surface = self.surface
        self.flush_borders()
        surface.advance_page(surface.orientation)
        self.last_y = surface.y
        logger.debug("Row %s starts page %s", index, surface.page_number)
        for repeated in self.table.repeat:
            if repeated != index:
                self.place_row(repeated)

    def mark_oversized_row(self, index: int) -> None:
        """Fill the rest of the page with the oversized row marker and skip the row."""
        surface = self.surface
        table = self.table
        bounds = surface.page_bounds()
        width = table.width or bounds.width
        height = bounds.bottom - self.last_y
        logger.warning(
            "Row %s is taller than the page (%.2f), drawing error marker",
            index,
            self.block_height(index),
        )
        surface.fill_rect(self.x0, self.last_y, width, height, OVERSIZED_ROW_COLOR)
        surface.draw_text_run(
            self.x0 + 1,
            self.last_y + height / 2,
            OVERSIZED_ROW_MESSAGE,
            self.default_font,
            "#000000",
        )
        self.last_y += height
        surface.y = self.last_y

    # ------------------------------------------------------------------
    # Borders
    # ------------------------------------------------------------------

    def flush_borders(self) -> None:
        for border in self._borders:
            self.cell_renderer.draw_border(border.x, border.y, border.width, border.height, border.spec)
        self._borders = []
