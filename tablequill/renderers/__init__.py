"""Drawing surfaces and output renderers."""

from .page_canvas import PageCanvas, RecordedPage
from .pdf_renderer import PDFRenderer
from .surface import DrawingSurface

__all__ = ["DrawingSurface", "PageCanvas", "PDFRenderer", "RecordedPage"]
