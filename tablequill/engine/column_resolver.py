"""

Column width resolution.

Handles:
- aggregating per-column min/max widths from single-column cells
- reconciling colspan cells across the columns they cover
- resolving the table width and distributing slack (flex, then free columns)

"""

from __future__ import annotations

import logging
from typing import List

from ..exceptions import LayoutError
from .span_reconciler import distribute_span
from .table_model import Cell, Table

logger = logging.getLogger(__name__)


def aggregate_columns(table: Table) -> Table:
    """Collect column min/max/flex/explicit from cells, then reconcile colspans."""
    spanning: List[Cell] = []
    for index, column in enumerate(table.columns):
        for cell in table.cells_in_column(index):
            if cell.flex > column.flex:
                column.flex = cell.flex
            if cell.spans_columns:
                spanning.append(cell)
                continue
            if cell.width is not None:
                column.explicit = True
            column.min_width = max(column.min_width, cell.min_width)
            column.max_width = max(column.max_width, cell.max_width)

    mins = [column.min_width for column in table.columns]
    maxs = [column.max_width for column in table.columns]
    explicit = [column.explicit for column in table.columns]
    for cell in spanning:
        span = range(cell.col, cell.col + cell.colspan)
        distribute_span(mins, span, explicit, cell.min_width)
        distribute_span(maxs, span, explicit, cell.max_width)

    for column, min_width, max_width in zip(table.columns, mins, maxs):
        column.min_width = min_width
        column.max_width = max(max_width, min_width)
    return table


def natural_width(table: Table) -> float:
    """Width the table takes without constraints."""
    return sum(
        column.min_width if column.explicit else column.max_width
        for column in table.columns
    )


def resolve_table_width(table: Table, available_width: float) -> Table:
    """Fix every column's final width and the table width."""
    columns = table.columns
    if not columns:
        table.width = 0.0
        return table

    natural = natural_width(table)
    width = table.width
    if natural > available_width:
        width = available_width

    if width is None:
        for column in columns:
            column.width = column.min_width if column.explicit else column.max_width
    else:
        total_min = sum(column.min_width for column in columns)
        slack = width - total_min
        if slack > 0:
            flex_columns = [column for column in columns if column.flex > 0]
            free_columns = [column for column in columns if not column.explicit]
            if flex_columns:
                per_flex = slack / sum(column.flex for column in flex_columns)
                for column in flex_columns:
                    column.min_width += per_flex * column.flex
            elif free_columns:
                share = slack / len(free_columns)
                for column in free_columns:
                    column.min_width += share
            else:
                share = slack / len(columns)
                for column in columns:
                    column.min_width += share
        for column in columns:
            column.width = column.min_width

    table.width = sum(column.width for column in columns)
    logger.debug(
        "Resolved table width %.2f (natural %.2f, available %.2f): %s",
        table.width,
        natural,
        available_width,
        [round(column.width, 2) for column in columns],
    )
    return table


def resolve_column_widths(table: Table, available_width: float) -> Table:
    if available_width <= 0:
        raise LayoutError("No horizontal space for the table", f"available width {available_width:.2f}")
    aggregate_columns(table)
    resolve_table_width(table, available_width)
    return assign_cell_boxes(table)


def assign_cell_boxes(table: Table) -> Table:
    """Horizontal position and width of every content cell from the final column widths."""
    offsets = [0.0]
    for column in table.columns:
        offsets.append(offsets[-1] + column.width)
    for cell in table.content_cells():
        cell.x = offsets[cell.col]
        cell.box_width = offsets[cell.col + cell.colspan] - offsets[cell.col]
    return table
