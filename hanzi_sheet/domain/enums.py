from __future__ import annotations

"""Shared enums for the worksheet domain.

Values are the persisted spellings, so they must stay stable across releases.
"""

from enum import Enum


class BlockKind(Enum):
    CHARACTER = "char"
    BLANK = "empty"


class GridStyle(Enum):
    """Guide-line pattern drawn inside each grid cell."""

    DIAMOND_GUIDE = "mi-zi-ge"   # 米字格: cross + diagonals
    SQUARE_GUIDE = "tian-zi-ge"  # 田字格: cross only
    BLANK = "empty"              # border only

    @property
    def label(self) -> str:
        return _GRID_STYLE_LABELS[self]


_GRID_STYLE_LABELS: dict[GridStyle, str] = {
    GridStyle.DIAMOND_GUIDE: "米字格",
    GridStyle.SQUARE_GUIDE: "田字格",
    GridStyle.BLANK: "Blank",
}


class TraceOpacity(Enum):
    """Named trace strengths; `alpha` is what renderers actually use."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def alpha(self) -> float:
        return _TRACE_ALPHA[self]

    @property
    def label(self) -> str:
        return _TRACE_LABELS[self]


_TRACE_ALPHA: dict[TraceOpacity, float] = {
    TraceOpacity.LOW: 0.10,
    TraceOpacity.MEDIUM: 0.25,
    TraceOpacity.HIGH: 0.50,
}

_TRACE_LABELS: dict[TraceOpacity, str] = {
    TraceOpacity.LOW: "Light",
    TraceOpacity.MEDIUM: "Medium",
    TraceOpacity.HIGH: "Dark",
}


class TopSpacing(Enum):
    """Note-taking space above each block, in points."""

    SMALL = 5
    MEDIUM = 30
    LARGE = 60

    @property
    def label(self) -> str:
        return self.name.capitalize()
