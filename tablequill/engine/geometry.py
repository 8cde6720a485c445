"""Geometry primitives for layout calculations.

All coordinates use the page's top-left corner as origin with ``y`` growing
downwards, in document user units.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)


@dataclass(slots=True)
class PageBounds:
    """Content area of the current page (inside the margins)."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top
