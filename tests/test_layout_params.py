import dataclasses

import pytest

from hanzi_sheet.domain.enums import GridStyle, TopSpacing, TraceOpacity
from hanzi_sheet.domain.layout_params import DEFAULT_LAYOUT, LayoutParameters


def test_defaults():
    p = LayoutParameters()
    assert p.trace_count == 5
    assert p.rows_per_character == 2
    assert p.show_pronunciation_header is True
    assert p.grid_style is GridStyle.DIAMOND_GUIDE
    assert p.top_spacing == 5
    assert p.trace_opacity is TraceOpacity.MEDIUM
    assert p.trace_alpha == pytest.approx(0.25)


def test_opacity_alphas():
    assert TraceOpacity.LOW.alpha == pytest.approx(0.1)
    assert TraceOpacity.MEDIUM.alpha == pytest.approx(0.25)
    assert TraceOpacity.HIGH.alpha == pytest.approx(0.5)


def test_mapping_roundtrip():
    p = LayoutParameters(
        trace_count=10,
        rows_per_character=5,
        show_pronunciation_header=False,
        grid_style=GridStyle.SQUARE_GUIDE,
        top_spacing=TopSpacing.LARGE.value,
        trace_opacity=TraceOpacity.HIGH,
    )
    m = p.to_mapping()
    assert m["grid_style"] == "tian-zi-ge"
    assert m["trace_opacity"] == "high"
    assert LayoutParameters.from_mapping(m) == p


@pytest.mark.parametrize(
    "field,value",
    [
        ("trace_count", 11),
        ("trace_count", -1),
        ("rows_per_character", 0),
        ("rows_per_character", 6),
        ("top_spacing", 7),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValueError):
        dataclasses.replace(DEFAULT_LAYOUT, **{field: value})


def test_from_mapping_falls_back_field_by_field():
    data = {
        "trace_count": "lots",
        "rows_per_character": 3,
        "show_pronunciation_header": "yes",
        "grid_style": "hexagon",
        "top_spacing": 30,
        "trace_opacity": None,
    }
    p = LayoutParameters.from_mapping(data)
    assert p.trace_count == DEFAULT_LAYOUT.trace_count
    assert p.rows_per_character == 3
    assert p.show_pronunciation_header is DEFAULT_LAYOUT.show_pronunciation_header
    assert p.grid_style is DEFAULT_LAYOUT.grid_style
    assert p.top_spacing == 30
    assert p.trace_opacity is DEFAULT_LAYOUT.trace_opacity


@pytest.mark.parametrize("data", [None, [], "layout", {"trace_count": True}, {"trace_count": 2.5}])
def test_from_mapping_malformed_input(data):
    assert LayoutParameters.from_mapping(data) == DEFAULT_LAYOUT
