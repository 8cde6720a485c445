"""
High-level API for TableQuill.

Example:
    >>> from tablequill import TableDocument
    >>>
    >>> doc = TableDocument(orientation="P", unit="mm", size="A4")
    >>> doc.set_font("Helvetica", "", 10)
    >>> doc.set_header_footer(footer='<table><tr><td align="right">{pn} / {pc}</td></tr></table>')
    >>> doc.add_page()
    >>> doc.htmltable('<table border="1"><tr><td>Hello</td><td>world</td></tr></table>')
    >>> doc.output("hello.pdf")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .config import DEFAULT_LINE_WIDTH_PT, LayoutSettings, PageSetup
from .engine.fonts import normalize_style, register_font
from .engine.geometry import Margins
from .engine.layout_pipeline import TableLayoutPipeline
from .engine.table_model import Table
from .engine.text_metrics import FontSpec, TextMetricsEngine
from .renderers.page_canvas import PageCanvas
from .renderers.pdf_renderer import PDFRenderer

logger = logging.getLogger(__name__)

__all__ = ["TableDocument", "render_markup_to_pdf"]


class TableDocument:
    """
    Paged PDF document built from table markup.

    Args:
        orientation: ``P`` (portrait) or ``L`` (landscape)
        unit: User unit for every size in markup and settings: ``pt``, ``mm``, ``cm``, ``in``
        size: ``A3``, ``A4``, ``A5``, ``Letter``, ``Legal`` or a ``(width, height)`` tuple in user units
        settings: Layout defaults; a fresh :class:`LayoutSettings` when omitted
    """

    def __init__(
        self,
        orientation: str = "P",
        unit: str = "mm",
        size: Union[str, Tuple[float, float]] = "A4",
        settings: Optional[LayoutSettings] = None,
    ):
        self.page_setup = PageSetup(orientation=orientation, unit=unit, size=size)
        self.settings = settings or LayoutSettings()
        self.settings.base_line_width = DEFAULT_LINE_WIDTH_PT / self.page_setup.scale
        self.metrics = TextMetricsEngine(self.page_setup.scale)

        self.canvas = PageCanvas(self.page_setup, self.metrics)
        self.canvas.on_page_start = self._draw_header
        self.canvas.on_page_end = self._draw_footer
        self.pipeline = TableLayoutPipeline(self.canvas, self.settings)

        self.header_table = ""
        self.footer_table = ""
        self.title: Optional[str] = None
        self._default_font_set = False

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def margins(self) -> Margins:
        return self.page_setup.margins

    def set_margins(self, left: float, top: float, right: Optional[float] = None,
                    bottom: Optional[float] = None) -> None:
        """Set page margins; ``right`` defaults to ``left`` and ``bottom`` to ``top``."""
        self.page_setup.margins = Margins(
            top=top,
            bottom=bottom if bottom else top,
            left=left,
            right=right if right is not None else left,
        )

    def set_left_margin(self, margin: float) -> None:
        self.page_setup.margins.left = margin

    def set_right_margin(self, margin: float) -> None:
        self.page_setup.margins.right = margin

    def set_cell_paddings(self, h_padding: float = 1, v_padding: float = 1) -> None:
        """Default cell paddings, overridden per cell by ``hpad``/``vpad``."""
        self.settings.h_cell_padding = h_padding
        self.settings.v_cell_padding = v_padding

    def set_spacing(self, line_spacing: float = 1) -> None:
        """Default line spacing as a multiple of the font line height."""
        self.settings.line_spacing = line_spacing

    def set_font(self, family: str, style: str = "", size: float = 0, default: bool = False) -> None:
        """
        Set the document font.

        The first call, and every call with ``default=True``, makes the font
        the default for text without its own font attributes.
        """
        if default or not self._default_font_set:
            self.settings.default_font = self.settings.default_font.merged(
                family, normalize_style(style), size
            )
            self._default_font_set = True

    def add_font(self, family: str, style: str = "", path: Union[str, Path] = "") -> str:
        """Register a TrueType font file under ``family``/``style``."""
        return register_font(family, style, path)

    def set_alias_page_num(self, alias: str = "{pn}") -> None:
        self.settings.page_num_alias = alias

    def set_alias_page_count(self, alias: str = "{pc}") -> None:
        self.settings.page_count_alias = alias

    def set_header_footer(self, header: str = "", footer: str = "") -> None:
        """
        Set running header and footer markup.

        The header is drawn at the top of each page right after it is added,
        the footer at the bottom margin right before the page is closed.
        Empty values keep the current markup.
        """
        if header:
            self.header_table = header
        if footer:
            self.footer_table = footer

    def set_title(self, title: str) -> None:
        self.title = title

    # ------------------------------------------------------------------
    # Pages and content
    # ------------------------------------------------------------------

    def add_page(self, orientation: Optional[str] = None) -> None:
        self.canvas.advance_page(orientation)

    def page_no(self) -> int:
        return self.canvas.page_number

    def htmltable(self, markup: str, multipage: bool = True) -> List[Table]:
        """
        Lay out and draw every ``<table>`` block of ``markup``.

        Args:
            markup: Table markup, possibly several tables one after another
            multipage: Allow tables to continue on following pages

        Returns:
            The laid out tables
        """
        if self.canvas.page_number == 0:
            self.add_page()
        return self.pipeline.render_blocks(markup, multipage)

    def output(self, path: Union[str, Path]) -> Path:
        """Close the document and write it as PDF to ``path``."""
        if self.canvas.page_number == 0:
            self.add_page()
        self.canvas.close()
        renderer = PDFRenderer(
            scale=self.page_setup.scale,
            page_count_alias=self.settings.page_count_alias,
            line_width=self.settings.base_line_width * self.page_setup.scale,
            title=self.title,
        )
        return renderer.render(self.canvas.pages, path)

    # ------------------------------------------------------------------
    # Page hooks
    # ------------------------------------------------------------------

    def _draw_header(self) -> None:
        if not self.header_table:
            return
        bounds = self.canvas.page_bounds()
        self.canvas.x = bounds.left
        self.canvas.y = 0.0
        self.pipeline.render_blocks(self.header_table, multipage=False)
        self.canvas.x = bounds.left
        self.canvas.y = max(self.canvas.y, bounds.top)

    def _draw_footer(self) -> None:
        if not self.footer_table:
            return
        bounds = self.canvas.page_bounds()
        self.canvas.x = bounds.left
        self.canvas.y = bounds.bottom
        self.pipeline.render_blocks(self.footer_table, multipage=False)


def render_markup_to_pdf(
    markup: str,
    output_path: Union[str, Path],
    orientation: str = "P",
    unit: str = "mm",
    size: Union[str, Tuple[float, float]] = "A4",
    font: Optional[FontSpec] = None,
    header: str = "",
    footer: str = "",
    multipage: bool = True,
) -> Path:
    """
    Render table markup into a PDF file in one call.

    Returns:
        Path of the written PDF
    """
    doc = TableDocument(orientation=orientation, unit=unit, size=size)
    if font is not None:
        doc.set_font(font.family, font.style, font.size, default=True)
    doc.set_header_footer(header, footer)
    doc.add_page()
    doc.htmltable(markup, multipage=multipage)
    return doc.output(output_path)
