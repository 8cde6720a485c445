"""Cell line breaking at rendering width."""

from __future__ import annotations

from typing import List

from .table_model import Cell, CellLine, HardBreak
from .text_flow import TextMeasurer
from .text_metrics import FontSpec


class CellLineBreaker:
    """

    Greedy line breaker working on the measured words of a cell.

    Runs after column resolution, when the box width is final. The offset
    starts at the left padding; a word joins the current line when it is the
    first one or when ``offset + width`` stays within the right padding edge.
    The gap before a word is charged once the word is on the line. In a
    ``nowrap`` cell a line may only wrap where a new font run starts.

    """

    def __init__(self, measurer: TextMeasurer, default_font: FontSpec) -> None:
        self.measurer = measurer
        self.default_font = default_font

    def wrap(self, cell: Cell) -> List[CellLine]:
        lines: List[CellLine] = []
        limit = cell.box_width - cell.h_padding
        start = cell.h_padding
        current = CellLine()

        first_font = cell.runs[0].font(self.default_font) if cell.runs else self.default_font
        fallback_height = self.measurer.line_height(first_font)

        for run in cell.runs:
            if not run.lines:
                continue
            line_height = self.measurer.line_height(run.font(self.default_font))
            space = run.space_width or 0.0
            fallback_height = line_height
            run_start = True

            for item in run.lines:
                if isinstance(item, HardBreak):
                    current.height = current.height or line_height
                    lines.append(current)
                    current = CellLine()
                    continue

                for word in item.words:
                    if current.word_count == 0:
                        current.width = word.width
                    elif (cell.nowrap and not run_start) or start + current.width + word.width <= limit:
                        current.width += space + word.width
                    else:
                        current.forced = True
                        current.height = current.height or line_height
                        lines.append(current)
                        current = CellLine(width=word.width)
                    current.word_width += word.width
                    current.word_count += 1
                    current.height = max(current.height, line_height)
                    word.line_index = len(lines)
                    run_start = False

        current.height = current.height or fallback_height
        lines.append(current)
        return lines
