# tests/conftest.py
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pathlib import Path
from typing import Optional

import pytest
from PyQt6.QtWidgets import QApplication

from hanzi_sheet.services.pdf_export import FontSources
from hanzi_sheet.services.pronunciation_lookup import DictionaryLookup

SAMPLE_DICTIONARY = {
    "你": ["nǐ"],
    "好": ["hǎo", "hào"],
    "我": ["wǒ"],
    "的": ["dí", "dì", "de"],
    "地": ["dì", "de"],
    "得": ["dé", "de", "děi"],
    "书": ["shū"],
    "慢": ["màn"],
    "走": ["zǒu"],
    "目": ["mù"],
    "方": ["fāng"],
    "们": ["men"],
}


@pytest.fixture
def lookup() -> DictionaryLookup:
    return DictionaryLookup(SAMPLE_DICTIONARY)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yaml"


@pytest.fixture
def export_path(tmp_path: Path) -> Path:
    return tmp_path / "out" / "chinese-worksheet.pdf"


@pytest.fixture
def window(qtbot, settings_path: Path, export_path: Path, lookup):
    from hanzi_sheet.ui.main_window import create_main_window

    def _save_path(_parent, _suggested: str) -> Optional[str]:
        return str(export_path)

    win = create_main_window(
        settings_path=settings_path,
        lookup=lookup,
        fonts=FontSources(),
        save_path_provider=_save_path,
        quiet_ms=10,
    )
    qtbot.addWidget(win)
    try:
        win.show()
        qtbot.waitExposed(win, timeout=1000)
    except Exception:
        pass
    QApplication.processEvents()
    return win
