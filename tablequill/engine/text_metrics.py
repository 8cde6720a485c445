"""

TextMetricsEngine - measuring words and line heights.

Uses ReportLab for font metrics and returns values in document user units:
- word width
- line height (proportional to font size)

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from reportlab.pdfbase import pdfmetrics  # type: ignore

from .fonts import normalize_style, resolve_font_name


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Fully resolved font: family, style letters (B/I/U) and size in points."""

    family: str
    style: str = ""
    size: float = 12.0

    @property
    def underline(self) -> bool:
        return "U" in normalize_style(self.style)

    @property
    def pdf_name(self) -> str:
        return resolve_font_name(self.family, self.style)

    def merged(
        self,
        family: Optional[str] = None,
        style: Optional[str] = None,
        size: Optional[float] = None,
    ) -> "FontSpec":
        """Return a copy with the given fields overriding this font."""
        return FontSpec(
            family=family if family else self.family,
            style=style if style is not None else self.style,
            size=size if size and size > 0 else self.size,
        )


class TextMetricsEngine:
    """

    Engine for measuring text.

    ``scale`` is the number of points per document user unit, so that a
    document laid out in millimetres gets widths in millimetres.

    """

    def __init__(self, scale: float = 1.0):
        self.scale = scale
        self._width_cache: Dict[Tuple[str, str, float], float] = {}

    def measure_text(self, text: str, font: FontSpec) -> float:
        """Width of ``text`` set in ``font``."""
        if not text:
            return 0.0
        key = (text, font.pdf_name, font.size)
        width = self._width_cache.get(key)
        if width is None:
            width = pdfmetrics.stringWidth(text, font.pdf_name, font.size) / self.scale
            self._width_cache[key] = width
        return width

    def get_line_height(self, font: FontSpec) -> float:
        """Height of one line of ``font`` before line spacing is applied."""
        return font.size / self.scale
