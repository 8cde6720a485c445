"""
Attribute helpers for table markup.

Markup attributes are normalized silently: numbers parse their leading
numeric part, unknown keywords fall back to the defaults.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

# Attributes a ``tr`` passes down to each of its cells
ROW_INHERITED = (
    "align",
    "bgcolor",
    "border",
    "color",
    "colspan",
    "family",
    "flex",
    "height",
    "hpad",
    "lh",
    "rowspan",
    "size",
    "style",
    "valign",
    "vpad",
    "width",
)

_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

_ALIGN = {
    "left": "left",
    "center": "center",
    "right": "right",
    "justify": "justify",
}

_VALIGN = {
    "top": "top",
    "middle": "middle",
    "bottom": "bottom",
}

_MISSING = object()


def to_float(value: Any, default: float = 0.0) -> float:
    """Parse the leading number of ``value`` (``"12px"`` -> 12.0)."""
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_RE.match(str(value))
    if not match:
        return default
    return float(match.group(1))


def to_int(value: Any, default: int = 0) -> int:
    return int(to_float(value, default))


def normalize_align(value: Optional[str]) -> str:
    return _ALIGN.get(str(value or "").strip().lower(), "left")


def normalize_valign(value: Optional[str]) -> str:
    return _VALIGN.get(str(value or "").strip().lower(), "top")


def parse_font_style(value: Optional[str]) -> str:
    """Comma separated style words reduced to their initials: ``"bold, i"`` -> ``"BI"``."""
    if not value:
        return ""
    return "".join(part.strip()[:1] for part in value.upper().split(","))


def calc_width(value: Any, available: float) -> float:
    """Absolute width, or a percentage of ``available`` when written with ``%``."""
    text = str(value)
    if "%" in text:
        return to_float(text[: text.index("%")]) * available / 100
    return to_float(text)


def resolve_attribute(
    name: str,
    *layers: Optional[Mapping[str, Optional[str]]],
    default: Any = None,
) -> Any:
    """

    Layered attribute lookup.

    ``layers`` are searched in order (cell, row, table); the first mapping
    that defines ``name`` wins, otherwise ``default`` is returned.

    """
    for layer in layers:
        if not layer:
            continue
        value = layer.get(name, _MISSING)
        if value is not _MISSING:
            return value
    return default
