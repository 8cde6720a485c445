"""
TableQuill - table markup layout and pagination to PDF.

Turns a small HTML-like table markup (``table``, ``tr``, ``td``, ``font``,
``img``, ``br``) into paginated PDF tables:

- automatic column widths from the content, with explicit, percentage and
  ``flex`` widths
- row and column spans
- word wrapping with left/center/right/justify alignment
- page breaks with repeated header rows, keep-together chains and forced breaks
- running headers and footers with page number and page count placeholders
"""

from .api import TableDocument, render_markup_to_pdf
from .config import LayoutSettings, PageSetup
from .exceptions import (
    FontError,
    ImageNotFoundError,
    LayoutError,
    MediaError,
    ParsingError,
    RenderingError,
    TableQuillError,
    UnsupportedImageError,
)
from .version import __version__

__all__ = [
    "FontError",
    "ImageNotFoundError",
    "LayoutError",
    "LayoutSettings",
    "MediaError",
    "PageSetup",
    "ParsingError",
    "RenderingError",
    "TableDocument",
    "TableQuillError",
    "UnsupportedImageError",
    "__version__",
    "render_markup_to_pdf",
]
