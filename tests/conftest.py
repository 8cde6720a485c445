"""
Pytest configuration for TableQuill
"""

import logging
import sys

import pytest

from tablequill.config import LayoutSettings, PageSetup
from tablequill.engine.geometry import Margins
from tablequill.engine.layout_pipeline import TableLayoutPipeline
from tablequill.engine.text_metrics import FontSpec
from tablequill.renderers.page_canvas import PageCanvas


class FixedWidthMetrics:
    """Monospaced metrics: every character is 10 units wide, a line is as tall as the font size."""

    CHAR_WIDTH = 10.0

    def measure_text(self, text, font):
        return len(text) * self.CHAR_WIDTH

    def get_line_height(self, font):
        return font.size

    # DrawingSurface-style names, for passes that take a measurer
    def measure_word_width(self, text, font):
        return self.measure_text(text, font)

    def line_height(self, font):
        return self.get_line_height(font)


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def metrics():
    return FixedWidthMetrics()


@pytest.fixture
def settings():
    """Layout settings without paddings and with a 10pt default font."""
    return LayoutSettings(
        h_cell_padding=0,
        v_cell_padding=0,
        line_spacing=1,
        default_font=FontSpec("Helvetica", "", 10),
    )


@pytest.fixture
def page_setup():
    """200 x 100 point page without margins: 10 rows of 10 units fit on a page."""
    return PageSetup(orientation="L", unit="pt", size=(100, 200), margins=Margins.uniform(0))


@pytest.fixture
def canvas(page_setup, metrics):
    """Recording canvas with one open page."""
    surface = PageCanvas(page_setup, metrics)
    surface.advance_page()
    return surface


@pytest.fixture
def pipeline(canvas, settings):
    return TableLayoutPipeline(canvas, settings)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    logging.raiseExceptions = False
