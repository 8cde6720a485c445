"""

Table model shared by all layout passes.

The parser builds a ``Table`` once per markup block; intrinsic sizing, column
resolution, row resolution and pagination then fill in and read the sizing
fields in place. Grid slots are a tagged variant: ``None`` for an empty slot,
``Placeholder`` for a slot covered by another cell's span, or the content
``Cell`` itself.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from .text_metrics import FontSpec


###############################################################################
# Text content
###############################################################################


@dataclass(slots=True)
class Word:
    """Measured word; ``line_index`` is the wrapped output line it landed on."""

    text: str
    width: float
    line_index: int = 0


@dataclass(slots=True)
class MeasuredLine:
    """Words between two hard breaks, with their narrowest and widest extent."""

    words: List[Word] = field(default_factory=list)
    min_width: float = 0.0
    max_width: float = 0.0


@dataclass(frozen=True, slots=True)
class HardBreak:
    """Explicit ``<br>`` marker inside a font run."""


HARD_BREAK = HardBreak()

RunLine = Union[MeasuredLine, HardBreak]


@dataclass(slots=True)
class FontRun:
    """

    Span of text sharing one font. Unset fields fall back to the document
    default font when the run is measured or drawn.

    """

    family: Optional[str] = None
    style: Optional[str] = None
    size: Optional[float] = None
    color: Optional[str] = None
    lines: List[RunLine] = field(default_factory=list)
    space_width: Optional[float] = None

    def font(self, default: FontSpec) -> FontSpec:
        return default.merged(self.family, self.style, self.size)

    def words(self) -> Iterator[Word]:
        for line in self.lines:
            if isinstance(line, MeasuredLine):
                yield from line.words

    @property
    def has_text(self) -> bool:
        return any(True for _ in self.words())


@dataclass(slots=True)
class ImageRef:
    """Image cell content with its resolved size in user units."""

    path: str
    width: float
    height: float


@dataclass(slots=True)
class CellLine:
    """Output line produced by the cell line breaker."""

    width: float = 0.0  # words plus the spaces between them
    word_width: float = 0.0
    word_count: int = 0
    forced: bool = False  # ended by an automatic wrap, not a hard break
    height: float = 0.0  # font line height before line spacing


###############################################################################
# Grid
###############################################################################


@dataclass(slots=True)
class Placeholder:
    """Slot covered by the span of the cell at (owner_row, owner_col)."""

    owner_row: int
    owner_col: int


@dataclass(slots=True)
class Cell:
    row: int
    col: int
    rowspan: int = 1
    colspan: int = 1
    align: str = "left"
    valign: str = "top"
    h_padding: float = 1.0
    v_padding: float = 1.0
    line_spacing: float = 1.0
    border: Optional[str] = None
    bgcolor: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    flex: float = 0.0
    nowrap: bool = False
    image: Optional[ImageRef] = None
    runs: List[FontRun] = field(default_factory=list)

    # intrinsic sizing
    min_width: float = 0.0
    max_width: float = 0.0
    # row resolution
    content_height: float = 0.0
    min_height: float = 0.0
    lines: List[CellLine] = field(default_factory=list)
    # resolved box, relative to the table origin
    x: float = 0.0
    box_width: float = 0.0
    box_height: float = 0.0

    @property
    def spans_columns(self) -> bool:
        return self.colspan > 1

    @property
    def spans_rows(self) -> bool:
        return self.rowspan > 1

    @property
    def content_width(self) -> float:
        return self.box_width - self.h_padding * 2


Slot = Union[None, Placeholder, Cell]


@dataclass(slots=True)
class Column:
    min_width: float = 0.0
    max_width: float = 0.0
    flex: float = 0.0
    explicit: bool = False
    width: float = 0.0


@dataclass(slots=True)
class Row:
    index: int
    height: float = 0.0
    explicit_height: bool = False
    page_break_before: bool = False
    keep_with_next: bool = False
    repeat: bool = False
    bgcolor: Optional[str] = None
    attrs: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass(slots=True)
class Table:
    rows: List[Row] = field(default_factory=list)
    columns: List[Column] = field(default_factory=list)
    grid: List[List[Slot]] = field(default_factory=list)
    width: Optional[float] = None
    align: Optional[str] = None
    border: str = "0"
    bgcolor: Optional[str] = None
    nobreak: bool = False
    multipage: bool = True
    repeat: List[int] = field(default_factory=list)
    repeat_height: float = 0.0
    total_height: float = 0.0

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.columns)

    def slot(self, row: int, col: int) -> Slot:
        return self.grid[row][col]

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        """Content cell whose top-left corner is (row, col), if any."""
        slot = self.grid[row][col]
        return slot if isinstance(slot, Cell) else None

    def owner(self, row: int, col: int) -> Optional[Cell]:
        """Content cell occupying (row, col), following placeholders."""
        slot = self.grid[row][col]
        if isinstance(slot, Placeholder):
            return self.cell_at(slot.owner_row, slot.owner_col)
        return slot

    def cells_in_row(self, row: int) -> Iterator[Cell]:
        for slot in self.grid[row]:
            if isinstance(slot, Cell):
                yield slot

    def content_cells(self) -> Iterator[Cell]:
        """All content cells, row-major."""
        for row in range(self.n_rows):
            yield from self.cells_in_row(row)

    def cells_in_column(self, col: int) -> Iterator[Cell]:
        for row in range(self.n_rows):
            cell = self.cell_at(row, col)
            if cell is not None:
                yield cell
