from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfbase.ttfonts import TTFont  # type: ignore

from ..exceptions import FontError

logger = logging.getLogger(__name__)

# Standard PDF families: (regular, bold, italic, bold italic)
STANDARD_FAMILIES: Dict[str, Tuple[str, str, str, str]] = {
    "helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}

FONT_FALLBACKS = {
    "arial": "helvetica",
    "arial mt": "helvetica",
    "sans-serif": "helvetica",
    "verdana": "helvetica",
    "tahoma": "helvetica",
    "calibri": "helvetica",
    "times new roman": "times",
    "times-roman": "times",
    "serif": "times",
    "georgia": "times",
    "courier new": "courier",
    "monospace": "courier",
    "consolas": "courier",
}

DEFAULT_FAMILY = "helvetica"

# (family, "B"/"I"/"BI"/"") -> registered ReportLab font name
_REGISTERED: Dict[Tuple[str, str], str] = {}


def normalize_style(style: Optional[str]) -> str:
    """Reduce a style string to the subset of ``B``, ``I``, ``U`` it contains, in canonical order."""
    letters = (style or "").upper()
    return "".join(flag for flag in ("B", "I", "U") if flag in letters)


def _variant_key(style: Optional[str]) -> str:
    normalized = normalize_style(style)
    return normalized.replace("U", "")


def register_font(family: str, style: str, path: Union[str, Path]) -> str:
    """
    Register a TrueType font file for ``family``/``style``.

    Returns the ReportLab font name the variant is registered under.
    """
    key = (family.strip().lower(), _variant_key(style))
    font_name = f"{family.strip()}-{key[1] or 'R'}"
    font_path = Path(path)
    if not font_path.is_file():
        raise FontError("Font file not found", str(font_path))
    try:
        pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
    except Exception as exc:
        raise FontError(f"Cannot register font {font_name}", str(exc)) from exc
    _REGISTERED[key] = font_name
    logger.debug("Registered font %s (%s)", font_name, font_path)
    return font_name


def resolve_font_name(family: Optional[str], style: Optional[str] = "") -> str:
    """Map a markup family/style pair onto a ReportLab font name."""
    lowered = (family or DEFAULT_FAMILY).strip().lower() or DEFAULT_FAMILY
    variant = _variant_key(style)

    registered = _REGISTERED.get((lowered, variant)) or _REGISTERED.get((lowered, ""))
    if registered:
        return registered

    base = FONT_FALLBACKS.get(lowered, lowered)
    if base not in STANDARD_FAMILIES:
        logger.debug("Unknown font family %r, using %s", family, DEFAULT_FAMILY)
        base = DEFAULT_FAMILY
    regular, bold, italic, bold_italic = STANDARD_FAMILIES[base]
    return {"": regular, "B": bold, "I": italic, "BI": bold_italic}[variant]
