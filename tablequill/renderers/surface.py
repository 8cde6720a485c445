"""
Drawing surface contract used by the table writer.

Coordinates are in document user units with the origin at the top-left
corner of the page and ``y`` growing downwards. Text is positioned by the
vertical centre of its line.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..engine.geometry import PageBounds
from ..engine.text_metrics import FontSpec


class DrawingSurface(ABC):
    """Paged surface the layout engine measures against and draws onto."""

    #: Current cursor position
    x: float = 0.0
    y: float = 0.0

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    @abstractmethod
    def measure_word_width(self, text: str, font: FontSpec) -> float:
        """Width of ``text`` set in ``font``."""

    @abstractmethod
    def line_height(self, font: FontSpec) -> float:
        """Height of one text line of ``font``."""

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    @abstractmethod
    def page_bounds(self) -> PageBounds:
        """Content area of the current page."""

    @abstractmethod
    def advance_page(self, orientation: Optional[str] = None) -> None:
        """Close the current page and start a new one."""

    @property
    @abstractmethod
    def page_number(self) -> int:
        """1-based number of the current page, 0 before the first page."""

    @property
    @abstractmethod
    def orientation(self) -> str:
        """``P`` or ``L`` for the current page."""

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    @abstractmethod
    def draw_text_run(self, x: float, y: float, text: str, font: FontSpec, color: Optional[str] = None) -> None:
        """Draw ``text`` starting at ``x`` with its line centred on ``y``."""

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        pass

    @abstractmethod
    def stroke_rect(self, x: float, y: float, width: float, height: float, weight: float = 1.0) -> None:
        """Outline a rectangle; ``weight`` multiplies the base line width."""

    @abstractmethod
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        pass

    @abstractmethod
    def draw_image(self, path: str, x: float, y: float, width: float, height: float) -> None:
        pass
