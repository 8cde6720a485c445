"""
Configuration for TableQuill documents.

Handles page setup (orientation, unit, size, margins) and the layout defaults
shared by all table blocks of a document (cell paddings, line spacing, default
font, page placeholders).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from .engine.geometry import Margins, Size
from .engine.text_metrics import FontSpec

# Scale factors: points per user unit
UNIT_SCALES: Dict[str, float] = {
    "pt": 1.0,
    "mm": 72 / 25.4,
    "cm": 72 / 2.54,
    "in": 72.0,
}

# Page formats in points (portrait)
PAGE_FORMATS: Dict[str, Tuple[float, float]] = {
    "a3": (841.89, 1190.55),
    "a4": (595.28, 841.89),
    "a5": (420.94, 595.28),
    "letter": (612.0, 792.0),
    "legal": (612.0, 1008.0),
}

# Default stroke width in points (0.2 mm)
DEFAULT_LINE_WIDTH_PT = 0.567


def normalize_orientation(value: Optional[str], fallback: str = "P") -> str:
    """Map ``P``/``portrait``/``L``/``landscape`` (any case) onto ``P`` or ``L``."""
    if not value:
        return fallback
    token = str(value).strip().upper()
    if token in ("P", "PORTRAIT"):
        return "P"
    if token in ("L", "LANDSCAPE"):
        return "L"
    raise ValueError(f"Incorrect orientation: {value}")


@dataclass(slots=True)
class PageSetup:
    """Physical page description of a document."""

    orientation: str = "P"
    unit: str = "mm"
    size: Union[str, Tuple[float, float]] = "A4"
    margins: Optional[Margins] = None

    def __post_init__(self) -> None:
        self.orientation = normalize_orientation(self.orientation)
        self.unit = self.unit.lower()
        if self.unit not in UNIT_SCALES:
            raise ValueError(f"Incorrect unit: {self.unit}")
        if self.margins is None:
            self.margins = self.default_margins(self.orientation)

    @property
    def scale(self) -> float:
        """Points per user unit."""
        return UNIT_SCALES[self.unit]

    def portrait_size(self) -> Size:
        """Page size in user units, portrait orientation."""
        if isinstance(self.size, str):
            key = self.size.lower()
            if key not in PAGE_FORMATS:
                raise ValueError(f"Unknown page size: {self.size}")
            width_pt, height_pt = PAGE_FORMATS[key]
            width, height = width_pt / self.scale, height_pt / self.scale
        else:
            width, height = (float(v) for v in self.size)
        if width > height:
            width, height = height, width
        return Size(width, height)

    def page_size(self, orientation: Optional[str] = None) -> Size:
        """Page size in user units for the given (or configured) orientation."""
        size = self.portrait_size()
        if normalize_orientation(orientation, self.orientation) == "L":
            return Size(size.height, size.width)
        return size

    @staticmethod
    def default_margins(orientation: str) -> Margins:
        if orientation == "P":
            return Margins(top=10.0, bottom=10.0, left=20.0, right=10.0)
        return Margins(top=20.0, bottom=20.0, left=10.0, right=10.0)


@dataclass(slots=True)
class LayoutSettings:
    """
    Defaults applied to every table block of a document.

    ``h_cell_padding``/``v_cell_padding`` are overridden per cell by the
    ``hpad``/``vpad`` attributes and ``line_spacing`` by ``lh``.
    """

    h_cell_padding: float = 1.0
    v_cell_padding: float = 1.0
    line_spacing: float = 1.0
    default_font: FontSpec = field(default_factory=lambda: FontSpec("Helvetica", "", 12.0))
    page_num_alias: str = "{pn}"
    page_count_alias: str = "{pc}"
    # Stroke width in user units; set from the page unit by the document
    base_line_width: float = DEFAULT_LINE_WIDTH_PT
