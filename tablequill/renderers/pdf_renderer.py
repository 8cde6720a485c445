"""
PDF Renderer - writes recorded pages with ReportLab.

Converts the top-left, user unit coordinates of the page canvas into PDF
points with the origin at the bottom-left corner.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from reportlab.lib.colors import Color  # type: ignore
from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfgen import canvas  # type: ignore

from ..config import DEFAULT_LINE_WIDTH_PT
from ..exceptions import RenderingError
from ..utils.color_utils import to_color
from .page_canvas import FillRectOp, ImageOp, LineOp, RecordedPage, StrokeRectOp, TextOp

logger = logging.getLogger(__name__)

# Baseline offset below the line centre, as a fraction of the font size
BASELINE_OFFSET = 0.3
UNDERLINE_POSITION = 0.1
UNDERLINE_THICKNESS = 0.05


class PDFRenderer:
    """
    Replays recorded pages onto a ReportLab canvas.

    Args:
        scale: Points per document user unit
        page_count_alias: Token replaced by the total page count in text
        line_width: Base stroke width in points
        title: Optional document title stored in the PDF metadata
    """

    def __init__(
        self,
        scale: float,
        page_count_alias: str = "{pc}",
        line_width: float = DEFAULT_LINE_WIDTH_PT,
        title: Optional[str] = None,
    ):
        self.scale = scale
        self.page_count_alias = page_count_alias
        self.line_width = line_width
        self.title = title

    def render(self, pages: List[RecordedPage], output_path: Union[str, Path]) -> Path:
        if not pages:
            raise RenderingError("Nothing to render", "document has no pages")

        output_path = Path(output_path)
        page_count = str(len(pages))
        try:
            c = canvas.Canvas(str(output_path))
            if self.title:
                c.setTitle(self.title)
            for page in pages:
                self._render_page(c, page, page_count)
                c.showPage()
            c.save()
        except OSError as exc:
            raise RenderingError(f"Cannot write {output_path}", str(exc)) from exc

        logger.info("Wrote %s page(s) to %s", len(pages), output_path)
        return output_path

    # ------------------------------------------------------------------
    def _render_page(self, c, page: RecordedPage, page_count: str) -> None:
        width_pt = page.size.width * self.scale
        height_pt = page.size.height * self.scale
        c.setPageSize((width_pt, height_pt))
        c.setLineWidth(self.line_width)
        c.setStrokeColor(to_color(None))

        for op in page.ops:
            if isinstance(op, FillRectOp):
                c.setFillColor(self._color(op.color))
                c.rect(*self._box(op.x, op.y, op.width, op.height, height_pt), stroke=0, fill=1)
            elif isinstance(op, StrokeRectOp):
                c.setLineWidth(self.line_width * op.weight)
                c.rect(*self._box(op.x, op.y, op.width, op.height, height_pt), stroke=1, fill=0)
                c.setLineWidth(self.line_width)
            elif isinstance(op, LineOp):
                c.line(
                    op.x1 * self.scale,
                    height_pt - op.y1 * self.scale,
                    op.x2 * self.scale,
                    height_pt - op.y2 * self.scale,
                )
            elif isinstance(op, ImageOp):
                self._draw_image(c, op, height_pt)
            elif isinstance(op, TextOp):
                self._draw_text(c, op, height_pt, page_count)

    def _box(self, x: float, y: float, width: float, height: float, page_height_pt: float) -> Iterable[float]:
        return (
            x * self.scale,
            page_height_pt - (y + height) * self.scale,
            width * self.scale,
            height * self.scale,
        )

    def _color(self, value: Optional[str]) -> Color:
        return to_color(value)

    def _draw_text(self, c, op: TextOp, page_height_pt: float, page_count: str) -> None:
        text = op.text.replace(self.page_count_alias, page_count)
        font = op.font
        x_pt = op.x * self.scale
        baseline_pt = page_height_pt - op.y * self.scale - BASELINE_OFFSET * font.size

        color = self._color(op.color)
        c.setFillColor(color)
        c.setFont(font.pdf_name, font.size)
        c.drawString(x_pt, baseline_pt, text)

        if font.underline:
            width_pt = pdfmetrics.stringWidth(text, font.pdf_name, font.size)
            y_pt = baseline_pt - UNDERLINE_POSITION * font.size
            c.saveState()
            c.setStrokeColor(color)
            c.setLineWidth(UNDERLINE_THICKNESS * font.size)
            c.line(x_pt, y_pt, x_pt + width_pt, y_pt)
            c.restoreState()

    def _draw_image(self, c, op: ImageOp, page_height_pt: float) -> None:
        try:
            c.drawImage(
                op.path,
                *self._box(op.x, op.y, op.width, op.height, page_height_pt),
                preserveAspectRatio=False,
                mask="auto",
            )
        except OSError as exc:
            raise RenderingError(f"Cannot draw image {op.path}", str(exc)) from exc
