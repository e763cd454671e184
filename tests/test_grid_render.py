import pytest

from hanzi_sheet.domain.enums import GridStyle, TraceOpacity
from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.domain.grid_render import guide_lines_for, render_block
from hanzi_sheet.domain.pagination import blank_block, character_block
from hanzi_sheet.domain.annotation_types import CharacterAnnotation


@pytest.fixture
def block():
    return character_block("你", 0, CharacterAnnotation("你", "nǐ", ("nǐ",)))


def test_trace_schedule_default(block):
    r = render_block(block, LayoutParameters())
    assert len(r.cells) == 22
    assert r.cells[0].glyph == "你"
    assert r.cells[0].glyph_opacity == 1.0
    for cell in r.cells[1:6]:
        assert cell.glyph == "你"
        assert cell.glyph_opacity == pytest.approx(0.25)
    for cell in r.cells[6:]:
        assert cell.glyph is None
        assert cell.glyph_opacity == 0.0


def test_zero_traces_shows_model_only(block):
    r = render_block(block, LayoutParameters(trace_count=0, trace_opacity=TraceOpacity.HIGH))
    assert [c.glyph for c in r.cells if c.glyph] == ["你"]


def test_traces_wrap_into_second_row(block):
    r = render_block(block, LayoutParameters(trace_count=10, rows_per_character=2))
    first_row, second_row = r.rows()
    assert all(c.glyph == "你" for c in first_row)
    assert all(c.glyph is None for c in second_row)
    assert second_row[0].index == 11


def test_cells_are_row_major(block):
    r = render_block(block, LayoutParameters(rows_per_character=3))
    assert len(r.cells) == 33
    assert [(c.row, c.col) for c in r.cells[10:13]] == [(0, 10), (1, 0), (1, 1)]
    assert [c.index for c in r.cells] == list(range(33))


def test_blank_block_has_no_glyphs():
    r = render_block(blank_block(0, 0), LayoutParameters())
    assert all(c.glyph is None for c in r.cells)
    assert r.header_text == ""


def test_header_hidden_when_disabled(block):
    assert render_block(block, LayoutParameters()).header_text == "nǐ"
    assert render_block(block, LayoutParameters(show_pronunciation_header=False)).header_text is None


def test_guide_lines_by_style():
    blank = guide_lines_for(GridStyle.BLANK)
    square = guide_lines_for(GridStyle.SQUARE_GUIDE)
    diamond = guide_lines_for(GridStyle.DIAMOND_GUIDE)

    assert len(blank) == 4 and not any(s.dashed for s in blank)
    assert len([s for s in square if s.dashed]) == 2
    assert len([s for s in diamond if s.dashed]) == 4
    assert set(blank) < set(square) < set(diamond)


def test_same_input_same_output(block):
    p = LayoutParameters(grid_style=GridStyle.SQUARE_GUIDE)
    assert render_block(block, p) == render_block(block, p)
