"""

Text alignment inside a cell box.

Supports:
- left: left padding edge (default)
- center: centred between the paddings
- right: right padding edge
- justify: stretched inter-word gaps on automatically wrapped lines

"""

from typing import Optional, Tuple

from .table_model import Cell, CellLine


class TextAlignmentEngine:
    """Computes horizontal line offsets relative to the cell's left edge."""

    @staticmethod
    def line_start(cell: Cell, line: CellLine) -> Tuple[float, Optional[float]]:
        """

        Returns ``(x, gap)`` for ``line``.

        ``x`` is where the first word starts. ``gap`` is the inter-word gap
        replacing the font's space for justified lines, or ``None`` when the
        normal space applies.

        """
        padding = cell.h_padding
        available = cell.content_width
        x = padding
        gap = None

        if cell.align == "center":
            x = padding + (available - line.width) / 2
        elif cell.align == "right":
            x = padding + available - line.width
        elif cell.align == "justify" and line.forced and line.word_count > 1:
            gap = (available - line.word_width) / (line.word_count - 1)

        return max(x, padding), gap

    @staticmethod
    def vertical_offset(cell: Cell) -> float:
        """Offset of the content block from the top of the cell box."""
        if cell.valign == "middle":
            return (cell.box_height - cell.content_height) / 2
        if cell.valign == "bottom":
            return cell.box_height - cell.content_height
        return 0.0
