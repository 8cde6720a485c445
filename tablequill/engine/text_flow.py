"""Text flow: splitting raw text into measured words and lines.

This stage only measures. Lines end at hard breaks; automatic wrapping is
decided later by :mod:`tablequill.engine.line_breaker` once column widths are
known.
"""

from __future__ import annotations

from typing import Protocol

from .table_model import HARD_BREAK, FontRun, HardBreak, MeasuredLine, Word
from .text_metrics import FontSpec


class TextMeasurer(Protocol):
    def measure_word_width(self, text: str, font: FontSpec) -> float: ...

    def line_height(self, font: FontSpec) -> float: ...


class TextFlow:
    """Appends text and breaks to font runs, tracking per-line min/max widths."""

    def __init__(self, measurer: TextMeasurer, default_font: FontSpec) -> None:
        self.measurer = measurer
        self.default_font = default_font

    def append_text(self, run: FontRun, text: str, nowrap: bool = False) -> None:
        words = text.split()
        if not words:
            return

        font = run.font(self.default_font)
        if run.space_width is None:
            run.space_width = self.measurer.measure_word_width(" ", font)

        if not run.lines or isinstance(run.lines[-1], HardBreak):
            run.lines.append(MeasuredLine())
        line = run.lines[-1]

        for token in words:
            width = self.measurer.measure_word_width(token, font)
            if line.words:
                line.max_width += run.space_width
            line.words.append(Word(token, width))
            line.max_width += width
            if width > line.min_width:
                line.min_width = width

        if nowrap:
            # the line may never break, so it needs its full width
            line.min_width = line.max_width

    def append_break(self, run: FontRun) -> None:
        run.lines.append(HARD_BREAK)
