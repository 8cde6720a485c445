"""
Cell rendering.

Draws the background, image or text of a resolved cell box onto a drawing
surface. Borders are not drawn here: the writer queues them so that they end
up on top of every neighbouring fill.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .table_model import Cell, HardBreak, Row, Table
from .text_alignment import TextAlignmentEngine
from .text_metrics import FontSpec

logger = logging.getLogger(__name__)

DEFAULT_TEXT_COLOR = "#000000"
MAX_BORDER_WEIGHT = 10


class CellRenderer:
    """Renders one cell at a given page position."""

    def __init__(self, surface, default_font: FontSpec):
        self.surface = surface
        self.default_font = default_font
        self.alignment = TextAlignmentEngine()

    def render(self, table: Table, row: Row, cell: Cell, x: float, y: float) -> None:
        """Draw ``cell`` with its box's top-left corner at (x, y)."""
        fill = cell.bgcolor or row.bgcolor or table.bgcolor
        if fill:
            self.surface.fill_rect(x, y, cell.box_width, cell.box_height, fill)

        if cell.image is not None:
            image = cell.image
            self.surface.draw_image(image.path, x, y, image.width, image.height)
            return

        self._draw_text(cell, x, y)

    def _draw_text(self, cell: Cell, x: float, y: float) -> None:
        lines = cell.lines
        if not lines:
            return

        line_index = 0
        center = self.alignment.vertical_offset(cell) + lines[0].height / 2
        if cell.v_padding > 0:
            center += cell.v_padding
        offset, gap = self.alignment.line_start(cell, lines[0])

        def next_line():
            nonlocal line_index, center, offset, gap
            center += lines[line_index].height * cell.line_spacing
            line_index += 1
            if line_index < len(lines):
                offset, gap = self.alignment.line_start(cell, lines[line_index])

        for run in cell.runs:
            font = run.font(self.default_font)
            color = run.color or DEFAULT_TEXT_COLOR
            space = run.space_width or 0.0
            for item in run.lines:
                if isinstance(item, HardBreak):
                    next_line()
                    continue
                for word in item.words:
                    while line_index < word.line_index:
                        next_line()
                    self.surface.draw_text_run(x + offset, y + center, word.text, font, color)
                    offset += word.width + (gap if gap is not None else space)

    # ------------------------------------------------------------------
    # Borders
    # ------------------------------------------------------------------

    @staticmethod
    def border_spec(cell: Cell, table: Table) -> Optional[str]:
        """Border spec to queue for ``cell``, or ``None`` when nothing is drawn."""
        spec = (cell.border or table.border or "").strip()
        if not spec or spec == "0":
            return None
        if len(spec) == 4:
            return spec if any(_edge_flags(spec)) else None
        return spec if _border_weight(spec) > 0 else None

    def draw_border(self, x: float, y: float, width: float, height: float, spec: str) -> None:
        """Stroke a queued border.

        A four character spec toggles the top, right, bottom and left edges;
        any non-zero digit turns an edge on. ``1`` outlines the box and
        ``2``..``10`` outline it with that multiple of the base stroke width.
        Larger weights draw nothing.
        """
        surface = self.surface
        if len(spec) == 4:
            top, right, bottom, left = _edge_flags(spec)
            if top:
                surface.stroke_line(x, y, x + width, y)
            if right:
                surface.stroke_line(x + width, y, x + width, y + height)
            if bottom:
                surface.stroke_line(x, y + height, x + width, y + height)
            if left:
                surface.stroke_line(x, y, x, y + height)
            return

        weight = _border_weight(spec)
        if weight == 1:
            surface.stroke_rect(x, y, width, height)
        elif weight > 1:
            surface.stroke_rect(x, y, width, height, weight=float(weight))


def _border_weight(spec: str) -> int:
    try:
        weight = int(spec)
    except ValueError:
        logger.debug("Ignoring border spec %r", spec)
        return 0
    if weight < 0 or weight > MAX_BORDER_WEIGHT:
        logger.debug("Ignoring border weight %d", weight)
        return 0
    return weight


def _edge_flags(spec: str) -> Tuple[bool, bool, bool, bool]:
    top, right, bottom, left = (flag.isdigit() and flag != "0" for flag in spec)
    return top, right, bottom, left
