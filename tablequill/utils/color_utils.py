"""Color helpers for markup colors."""

from __future__ import annotations

import logging

from reportlab.lib.colors import Color, HexColor  # type: ignore

logger = logging.getLogger(__name__)

WORD_COLOR_MAP = {
    "black": "#000000",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#008000",
    "lime": "#00FF00",
    "blue": "#0000FF",
    "navy": "#000080",
    "yellow": "#FFFF00",
    "orange": "#FFA500",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "silver": "#C0C0C0",
    "gray": "#808080",
    "grey": "#808080",
    "maroon": "#800000",
    "purple": "#800080",
    "olive": "#808000",
    "teal": "#008080",
}

_HEX_DIGITS = "0123456789abcdefABCDEF"


def _normalize_color(value: object, fallback: str) -> str:
    token = str(value or "").strip()
    if not token:
        return fallback

    mapped = WORD_COLOR_MAP.get(token.lower())
    if mapped:
        return mapped

    digits = token[1:] if token.startswith("#") else token
    if len(digits) == 3 and all(ch in _HEX_DIGITS for ch in digits):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6 or not all(ch in _HEX_DIGITS for ch in digits):
        logger.debug("Unknown color %r, using %s", value, fallback)
        return fallback
    return f"#{digits}"


def to_color(value: object, fallback: str = "#000000") -> Color:
    """ReportLab color for a markup value (``#rgb``, ``#rrggbb`` or a name)."""
    return HexColor(_normalize_color(value, fallback))
