from pathlib import Path

import pytest
import yaml

from hanzi_sheet.domain.enums import GridStyle, TraceOpacity
from hanzi_sheet.domain.layout_params import DEFAULT_LAYOUT, LayoutParameters
from hanzi_sheet.services.settings_store import SettingsStore


@pytest.fixture
def store(settings_path: Path) -> SettingsStore:
    return SettingsStore(settings_path)


def test_missing_file_loads_defaults(store):
    assert store.load() == {}
    assert store.load_layout_parameters() == DEFAULT_LAYOUT


def test_layout_roundtrip(store):
    params = LayoutParameters(
        trace_count=3,
        rows_per_character=4,
        show_pronunciation_header=False,
        grid_style=GridStyle.BLANK,
        top_spacing=30,
        trace_opacity=TraceOpacity.LOW,
    )
    store.save_layout_parameters(params)
    assert store.load_layout_parameters() == params

    raw = yaml.safe_load(store.path.read_text(encoding="utf-8"))
    assert raw["layout"]["grid_style"] == "empty"
    assert raw["layout"]["rows_per_character"] == 4


def test_save_preserves_other_keys(store):
    store.save({"window": {"width": 900}})
    store.save_layout_parameters(DEFAULT_LAYOUT)
    loaded = store.load()
    assert loaded["window"] == {"width": 900}
    assert "layout" in loaded


def test_no_temp_file_left_behind(store):
    store.save_layout_parameters(DEFAULT_LAYOUT)
    assert [p.name for p in store.path.parent.iterdir()] == [store.path.name]


@pytest.mark.parametrize("content", ["{not: [valid", "- just\n- a list\n", ""])
def test_malformed_file_loads_defaults(store, content):
    store.path.write_text(content, encoding="utf-8")
    assert store.load() == {}
    assert store.load_layout_parameters() == DEFAULT_LAYOUT


def test_partial_layout_falls_back_per_field(store):
    store.save({"layout": {"rows_per_character": 3, "grid_style": "triangle"}})
    p = store.load_layout_parameters()
    assert p.rows_per_character == 3
    assert p.grid_style is DEFAULT_LAYOUT.grid_style
