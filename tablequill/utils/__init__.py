"""Utility helpers for TableQuill."""

from .color_utils import to_color
from .logger import configure_logging, set_log_level

__all__ = ["configure_logging", "set_log_level", "to_color"]
