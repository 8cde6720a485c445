"""Intrinsic sizing: minimum and maximum content width of every cell."""

from __future__ import annotations

import logging

from .table_model import Cell, MeasuredLine, Table

logger = logging.getLogger(__name__)


def measure_cell(cell: Cell) -> None:
    """Fill ``cell.min_width``/``cell.max_width`` from its measured lines."""
    min_width = max_width = 0.0
    has_text = False
    for run in cell.runs:
        for line in run.lines:
            if not isinstance(line, MeasuredLine):
                continue
            has_text = True
            min_width = max(min_width, line.min_width)
            max_width = max(max_width, line.max_width)

    if has_text:
        paddings = cell.h_padding * 2
        min_width += paddings
        max_width += paddings

    if cell.nowrap:
        min_width = max_width

    if cell.width is not None:
        if min_width > cell.width:
            # content is never clipped
            cell.width = min_width
        else:
            min_width = cell.width

    cell.min_width = max(min_width, 0.0)
    cell.max_width = max(max_width, cell.min_width)


def compute_intrinsic_widths(table: Table) -> Table:
    for cell in table.content_cells():
        measure_cell(cell)
        logger.debug(
            "Cell (%s, %s): min=%.2f max=%.2f",
            cell.row,
            cell.col,
            cell.min_width,
            cell.max_width,
        )
    return table
