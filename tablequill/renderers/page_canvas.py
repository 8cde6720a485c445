"""
PageCanvas - recording drawing surface.

Keeps the page list, the cursor and the page geometry while the layout engine
runs, and records draw operations per page. The recorded pages are written to
a file by :class:`~tablequill.renderers.pdf_renderer.PDFRenderer`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from ..config import PageSetup, normalize_orientation
from ..engine.geometry import PageBounds, Size
from ..engine.text_metrics import FontSpec, TextMetricsEngine
from ..exceptions import RenderingError
from .surface import DrawingSurface

logger = logging.getLogger(__name__)

PageHook = Callable[[], None]


@dataclass(slots=True)
class TextOp:
    x: float
    y: float  # centre of the text line
    text: str
    font: FontSpec
    color: Optional[str] = None


@dataclass(slots=True)
class FillRectOp:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(slots=True)
class StrokeRectOp:
    x: float
    y: float
    width: float
    height: float
    weight: float = 1.0


@dataclass(slots=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(slots=True)
class ImageOp:
    path: str
    x: float
    y: float
    width: float
    height: float


DrawOp = Union[TextOp, FillRectOp, StrokeRectOp, LineOp, ImageOp]


@dataclass(slots=True)
class RecordedPage:
    number: int
    orientation: str
    size: Size
    ops: List[DrawOp] = field(default_factory=list)


class PageCanvas(DrawingSurface):
    """
    Drawing surface that records operations page by page.

    ``on_page_start`` runs right after a page is opened (running headers) and
    ``on_page_end`` right before it is closed (running footers).
    """

    def __init__(self, page_setup: PageSetup, metrics: Optional[TextMetricsEngine] = None):
        self.page_setup = page_setup
        self.metrics = metrics or TextMetricsEngine(page_setup.scale)
        self.pages: List[RecordedPage] = []
        self.x = page_setup.margins.left
        self.y = page_setup.margins.top
        self.on_page_start: Optional[PageHook] = None
        self.on_page_end: Optional[PageHook] = None
        self.closed = False
        self._in_hook = False

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def measure_word_width(self, text: str, font: FontSpec) -> float:
        return self.metrics.measure_text(text, font)

    def line_height(self, font: FontSpec) -> float:
        return self.metrics.get_line_height(font)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    @property
    def page_number(self) -> int:
        return len(self.pages)

    @property
    def orientation(self) -> str:
        if self.pages:
            return self.pages[-1].orientation
        return self.page_setup.orientation

    @property
    def current_page(self) -> RecordedPage:
        if not self.pages:
            raise RenderingError("No page open", "add a page before drawing")
        return self.pages[-1]

    def page_bounds(self) -> PageBounds:
        margins = self.page_setup.margins
        size = self.pages[-1].size if self.pages else self.page_setup.page_size()
        return PageBounds(
            left=margins.left,
            top=margins.top,
            right=size.width - margins.right,
            bottom=size.height - margins.bottom,
        )

    def advance_page(self, orientation: Optional[str] = None) -> None:
        if self.closed:
            raise RenderingError("Document already closed")
        orientation = normalize_orientation(orientation, self.page_setup.orientation)
        if self.pages:
            self._run_hook(self.on_page_end)

        page = RecordedPage(
            number=len(self.pages) + 1,
            orientation=orientation,
            size=self.page_setup.page_size(orientation),
        )
        self.pages.append(page)
        self.x = self.page_setup.margins.left
        self.y = self.page_setup.margins.top
        logger.debug("Started page %s (%s)", page.number, orientation)
        self._run_hook(self.on_page_start)

    def close(self) -> None:
        """Finish the last page; further drawing is rejected."""
        if self.closed:
            return
        if self.pages:
            self._run_hook(self.on_page_end)
        self.closed = True

    def _run_hook(self, hook: Optional[PageHook]) -> None:
        if hook is None or self._in_hook:
            return
        self._in_hook = True
        try:
            hook()
        finally:
            self._in_hook = False

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw_text_run(self, x: float, y: float, text: str, font: FontSpec, color: Optional[str] = None) -> None:
        self.current_page.ops.append(TextOp(x, y, text, font, color))

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.current_page.ops.append(FillRectOp(x, y, width, height, color))

    def stroke_rect(self, x: float, y: float, width: float, height: float, weight: float = 1.0) -> None:
        self.current_page.ops.append(StrokeRectOp(x, y, width, height, weight))

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.current_page.ops.append(LineOp(x1, y1, x2, y2))

    def draw_image(self, path: str, x: float, y: float, width: float, height: float) -> None:
        self.current_page.ops.append(ImageOp(path, x, y, width, height))
