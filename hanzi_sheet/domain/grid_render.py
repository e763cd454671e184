from __future__ import annotations

"""Grid cell model for one block.

`render_block()` is consumed by both the Qt preview and the PDF export, so the
two can never disagree about which cell shows which glyph at which opacity.

Guide lines are expressed in unit-cell coordinates: (0, 0) is the top-left
corner of the cell and (1, 1) the bottom-right. Consumers scale them to their
own cell rectangle.
"""

from dataclasses import dataclass
from typing import Final, Optional

from hanzi_sheet.domain.enums import GridStyle
from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.domain.page_geometry import GRIDS_PER_ROW
from hanzi_sheet.domain.pagination import Block


@dataclass(frozen=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    dashed: bool = False


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    guide_lines: tuple[LineSegment, ...]
    glyph: Optional[str] = None
    glyph_opacity: float = 0.0

    @property
    def index(self) -> int:
        return self.row * GRIDS_PER_ROW + self.col


@dataclass(frozen=True)
class RenderedBlock:
    header_text: Optional[str]
    cells: tuple[Cell, ...]

    def rows(self) -> list[tuple[Cell, ...]]:
        return [
            self.cells[i:i + GRIDS_PER_ROW]
            for i in range(0, len(self.cells), GRIDS_PER_ROW)
        ]


_BORDER: Final[tuple[LineSegment, ...]] = (
    LineSegment(0.0, 0.0, 1.0, 0.0),
    LineSegment(1.0, 0.0, 1.0, 1.0),
    LineSegment(1.0, 1.0, 0.0, 1.0),
    LineSegment(0.0, 1.0, 0.0, 0.0),
)

_CROSS: Final[tuple[LineSegment, ...]] = (
    LineSegment(0.5, 0.0, 0.5, 1.0, dashed=True),
    LineSegment(0.0, 0.5, 1.0, 0.5, dashed=True),
)

_DIAGONALS: Final[tuple[LineSegment, ...]] = (
    LineSegment(0.0, 0.0, 1.0, 1.0, dashed=True),
    LineSegment(1.0, 0.0, 0.0, 1.0, dashed=True),
)

_GUIDES: Final[dict[GridStyle, tuple[LineSegment, ...]]] = {
    GridStyle.BLANK: _BORDER,
    GridStyle.SQUARE_GUIDE: _BORDER + _CROSS,
    GridStyle.DIAMOND_GUIDE: _BORDER + _CROSS + _DIAGONALS,
}


def guide_lines_for(style: GridStyle) -> tuple[LineSegment, ...]:
    return _GUIDES[style]


def glyph_for_index(block: Block, index: int, params: LayoutParameters) -> tuple[Optional[str], float]:
    """Glyph and opacity for the cell at flattened (row-major) `index`."""
    if not block.is_character or not block.char:
        return None, 0.0
    if index == 0:
        return block.char, 1.0
    if index <= int(params.trace_count):
        return block.char, params.trace_alpha
    return None, 0.0


def render_block(block: Block, params: LayoutParameters) -> RenderedBlock:
    lines = guide_lines_for(params.grid_style)
    cells: list[Cell] = []
    for row in range(int(params.rows_per_character)):
        for col in range(GRIDS_PER_ROW):
            glyph, opacity = glyph_for_index(block, row * GRIDS_PER_ROW + col, params)
            cells.append(Cell(row=row, col=col, guide_lines=lines, glyph=glyph, glyph_opacity=opacity))

    header = block.pronunciation if params.show_pronunciation_header else None
    return RenderedBlock(header_text=header, cells=tuple(cells))
