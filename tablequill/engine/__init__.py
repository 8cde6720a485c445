"""
Layout engine: table model, sizing passes and pagination.

The pass driver is :class:`tablequill.engine.layout_pipeline.TableLayoutPipeline`.
"""

from .geometry import Margins, PageBounds, Size
from .table_model import Cell, Column, FontRun, Placeholder, Row, Table
from .text_metrics import FontSpec, TextMetricsEngine

__all__ = [
    "Cell",
    "Column",
    "FontRun",
    "FontSpec",
    "Margins",
    "PageBounds",
    "Placeholder",
    "Row",
    "Size",
    "Table",
    "TextMetricsEngine",
]
