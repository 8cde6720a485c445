"""
TableLayoutPipeline - runs the layout passes for table markup.

Each ``<table>`` block goes through:
1. parsing into the table model
2. intrinsic (min/max) widths
3. column widths and cell boxes
4. line breaking and row heights
5. pagination and drawing
"""

from __future__ import annotations

import logging
from typing import Callable, List

from ..config import LayoutSettings
from ..media.image_probe import ImageInfo, probe_image
from ..parser.markup_parser import parse_table
from .column_resolver import resolve_column_widths
from .intrinsic_sizing import compute_intrinsic_widths
from .pagination_manager import TableWriter
from .row_resolver import resolve_row_heights
from .table_model import Table

logger = logging.getLogger(__name__)

TABLE_MARKER = "<table"
# Chunks shorter than this cannot hold a table and are skipped
MIN_BLOCK_LENGTH = 6


def split_table_blocks(markup: str) -> List[str]:
    """Split markup into ``<table`` blocks, dropping fragments too short to be one."""
    blocks = []
    for chunk in markup.split(TABLE_MARKER):
        if len(chunk) < MIN_BLOCK_LENGTH:
            continue
        blocks.append(TABLE_MARKER + chunk)
    return blocks


class TableLayoutPipeline:
    """Lays out and draws table markup on a drawing surface."""

    def __init__(
        self,
        surface,
        settings: LayoutSettings,
        image_probe: Callable[[str], ImageInfo] = probe_image,
    ):
        self.surface = surface
        self.settings = settings
        self.image_probe = image_probe

    def layout(self, markup: str, available_width: float) -> Table:
        """Parse one table block and resolve all of its sizes."""
        table = parse_table(markup, self.surface, self.settings, available_width, self.image_probe)
        compute_intrinsic_widths(table)
        resolve_column_widths(table, available_width)
        resolve_row_heights(table, self.surface, self.settings.default_font)
        return table

    def render(self, markup: str, multipage: bool = True) -> Table:
        """Lay out one table block and write it at the surface cursor."""
        table = self.layout(markup, self.surface.page_bounds().width)
        table.multipage = multipage
        TableWriter(self.surface, self.settings.default_font).write(table)
        return table

    def render_blocks(self, markup: str, multipage: bool = True) -> List[Table]:
        """
        Render every table block of ``markup`` one below the other.

        The page number placeholder is substituted with the current page
        number before parsing. Every block starts at the same left position.
        """
        markup = markup.replace(self.settings.page_num_alias, str(self.surface.page_number))
        x = self.surface.x
        tables = []
        for block in split_table_blocks(markup):
            self.surface.x = x
            tables.append(self.render(block, multipage))
        logger.debug("Rendered %s table block(s) on page %s", len(tables), self.surface.page_number)
        return tables
