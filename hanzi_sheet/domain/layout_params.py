from __future__ import annotations

"""Worksheet layout parameters.

`LayoutParameters` is immutable; UI code builds a new instance with
`dataclasses.replace(...)` whenever an option changes.

Persistence uses `to_mapping()` / `from_mapping()`. Loading is tolerant:
every field falls back to its default on its own, so one bad value never
discards the rest of the saved preferences.
"""

from dataclasses import dataclass
from typing import Any, Final, Mapping

from hanzi_sheet.domain.enums import GridStyle, TopSpacing, TraceOpacity

TRACE_COUNT_MIN: Final[int] = 0
TRACE_COUNT_MAX: Final[int] = 10
ROWS_PER_CHARACTER_MIN: Final[int] = 1
ROWS_PER_CHARACTER_MAX: Final[int] = 5

TRACE_COUNT_OPTIONS: Final[tuple[int, ...]] = tuple(range(TRACE_COUNT_MIN, TRACE_COUNT_MAX + 1))
ROWS_PER_CHARACTER_OPTIONS: Final[tuple[int, ...]] = tuple(
    range(ROWS_PER_CHARACTER_MIN, ROWS_PER_CHARACTER_MAX + 1)
)
TOP_SPACING_OPTIONS: Final[tuple[int, ...]] = tuple(s.value for s in TopSpacing)


@dataclass(frozen=True)
class LayoutParameters:
    trace_count: int = 5
    rows_per_character: int = 2
    show_pronunciation_header: bool = True
    grid_style: GridStyle = GridStyle.DIAMOND_GUIDE
    top_spacing: int = TopSpacing.SMALL.value
    trace_opacity: TraceOpacity = TraceOpacity.MEDIUM

    def __post_init__(self) -> None:
        if not TRACE_COUNT_MIN <= int(self.trace_count) <= TRACE_COUNT_MAX:
            raise ValueError("trace_count out of range: %r" % (self.trace_count,))
        if not ROWS_PER_CHARACTER_MIN <= int(self.rows_per_character) <= ROWS_PER_CHARACTER_MAX:
            raise ValueError("rows_per_character out of range: %r" % (self.rows_per_character,))
        if int(self.top_spacing) not in TOP_SPACING_OPTIONS:
            raise ValueError("top_spacing must be one of %r, got %r" % (TOP_SPACING_OPTIONS, self.top_spacing))
        if not isinstance(self.grid_style, GridStyle):
            raise TypeError("grid_style must be a GridStyle")
        if not isinstance(self.trace_opacity, TraceOpacity):
            raise TypeError("trace_opacity must be a TraceOpacity")

    @property
    def trace_alpha(self) -> float:
        return self.trace_opacity.alpha

    def to_mapping(self) -> dict[str, Any]:
        """Plain, YAML-safe representation keyed by field name."""
        return {
            "trace_count": int(self.trace_count),
            "rows_per_character": int(self.rows_per_character),
            "show_pronunciation_header": bool(self.show_pronunciation_header),
            "grid_style": self.grid_style.value,
            "top_spacing": int(self.top_spacing),
            "trace_opacity": self.trace_opacity.value,
        }

    @classmethod
    def from_mapping(cls, data: Any) -> "LayoutParameters":
        """Build parameters from persisted data, defaulting field by field."""
        d: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
        defaults = cls()

        def _int_in(key: str, allowed: tuple[int, ...], default: int) -> int:
            v = d.get(key, default)
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                return default
            try:
                iv = int(v)
            except (OverflowError, ValueError):
                return default
            if float(v) != iv:
                return default
            return iv if iv in allowed else default

        def _enum(key: str, enum_cls, default):
            try:
                return enum_cls(d.get(key, default.value))
            except ValueError:
                return default

        header = d.get("show_pronunciation_header", defaults.show_pronunciation_header)
        if not isinstance(header, bool):
            header = defaults.show_pronunciation_header

        return cls(
            trace_count=_int_in("trace_count", TRACE_COUNT_OPTIONS, defaults.trace_count),
            rows_per_character=_int_in(
                "rows_per_character", ROWS_PER_CHARACTER_OPTIONS, defaults.rows_per_character
            ),
            show_pronunciation_header=header,
            grid_style=_enum("grid_style", GridStyle, defaults.grid_style),
            top_spacing=_int_in("top_spacing", TOP_SPACING_OPTIONS, defaults.top_spacing),
            trace_opacity=_enum("trace_opacity", TraceOpacity, defaults.trace_opacity),
        )


DEFAULT_LAYOUT: Final[LayoutParameters] = LayoutParameters()
