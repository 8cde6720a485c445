"""

Row height resolution.

Handles:
- wrapping every cell at its resolved width and measuring its content height
- aggregating row heights from single-row cells
- reconciling rowspan cells across the rows they cover
- repeat (header) height and total table height

"""

from __future__ import annotations

import logging
from typing import List

from .line_breaker import CellLineBreaker
from .span_reconciler import distribute_span
from .table_model import Cell, Table
from .text_flow import TextMeasurer
from .text_metrics import FontSpec

logger = logging.getLogger(__name__)


def cell_content_height(cell: Cell) -> float:
    """Height of the wrapped lines times line spacing, plus vertical padding."""
    height = sum(line.height * cell.line_spacing for line in cell.lines)
    if cell.v_padding > 0:
        height += cell.v_padding * 2
    return height


def resolve_row_heights(table: Table, measurer: TextMeasurer, default_font: FontSpec) -> Table:
    breaker = CellLineBreaker(measurer, default_font)
    spanning: List[Cell] = []

    for row in table.rows:
        for cell in table.cells_in_row(row.index):
            cell.lines = breaker.wrap(cell)
            cell.content_height = cell_content_height(cell)
            height = cell.content_height
            if cell.height is not None and cell.height > height:
                height = cell.height
            cell.min_height = height

            if cell.spans_rows:
                spanning.append(cell)
                continue
            if cell.height is not None:
                row.explicit_height = True
            if height > row.height:
                row.height = height

    heights = [row.height for row in table.rows]
    explicit = [row.explicit_height for row in table.rows]
    for cell in spanning:
        distribute_span(heights, range(cell.row, cell.row + cell.rowspan), explicit, cell.min_height)
    for row, height in zip(table.rows, heights):
        row.height = height

    for cell in table.content_cells():
        cell.box_height = sum(heights[cell.row:cell.row + cell.rowspan])

    table.repeat_height = sum(table.rows[index].height for index in table.repeat)
    table.total_height = sum(heights)
    logger.debug(
        "Resolved row heights %s (total %.2f, repeat %.2f)",
        [round(height, 2) for height in heights],
        table.total_height,
        table.repeat_height,
    )
    return table
