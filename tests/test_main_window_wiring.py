import time
from pathlib import Path

import pytest
import yaml
from PyQt6.QtWidgets import QCheckBox, QComboBox, QLabel, QPlainTextEdit, QPushButton

from hanzi_sheet.domain.enums import GridStyle
from hanzi_sheet.domain.pagination import character_blocks
from hanzi_sheet.services.pdf_export import FontSources
from hanzi_sheet.ui import notification
from hanzi_sheet.ui.worksheet_preview import WorksheetPreview


def _controller(window):
    return window._handles.controller


def _type(qtbot, window, text: str) -> None:
    ctrl = _controller(window)
    with qtbot.waitSignal(ctrl.input.settled, timeout=1000):
        window.findChild(QPlainTextEdit, "editorCharacters").insertPlainText(text)
    qtbot.waitUntil(lambda: not ctrl.annotation.is_loading(), timeout=2000)


@pytest.mark.qt
class TestMainWindowWiring:
    def test_initial_state(self, window):
        ctrl = _controller(window)
        assert window.findChild(QLabel, "labelCharCounter").text() == "0 / 50 Characters"
        assert window.findChild(QLabel, "labelPageCount").text() == "1 Page"
        assert window.findChild(QCheckBox, "checkShowHeader").text() == "Pinyin Space"
        assert len(ctrl.pages) == 1
        assert character_blocks(ctrl.pages) == []

        preview = window.findChild(WorksheetPreview, "worksheetPreview")
        assert preview.pages() == ctrl.pages

    def test_typing_updates_counters_preview_and_headers(self, qtbot, window):
        ctrl = _controller(window)
        _type(qtbot, window, "你好")

        assert window.findChild(QLabel, "labelCharCounter").text() == "2 / 50 Characters"
        assert window.findChild(QCheckBox, "checkShowHeader").text() == "Show Pinyin"
        blocks = character_blocks(ctrl.pages)
        assert [b.char for b in blocks] == ["你", "好"]
        assert [b.pronunciation for b in blocks] == ["nǐ", "hǎo, hào"]
        assert "nǐ" in window.findChild(QLabel, "labelInlinePinyin").text()
        assert not window.findChild(QLabel, "labelUpdating").isVisibleTo(window)

    def test_inline_preview_uses_context_reading(self, qtbot, window):
        _type(qtbot, window, "我的书")
        html = window.findChild(QLabel, "labelInlinePinyin").text()
        assert ">de<" in html

    def test_limit_notice(self, qtbot, window):
        editor = window.findChild(QPlainTextEdit, "editorCharacters")
        editor.insertPlainText("一" * 50)
        editor.insertPlainText("二")

        popup = _controller(window).notification
        assert popup.kind == notification.ERROR
        assert popup.text() == "50 Characters Max"
        assert len(editor.toPlainText()) == 50

        editor.textCursor().deletePreviousChar()
        assert popup.kind is None

    def test_option_change_repaginates(self, qtbot, window):
        ctrl = _controller(window)
        _type(qtbot, window, "一二三四五")
        assert len(ctrl.pages) == 1

        combo = window.findChild(QComboBox, "comboRowsPerChar")
        combo.setCurrentIndex(combo.findText("5"))
        assert ctrl.params.rows_per_character == 5
        assert len(ctrl.pages) == 3
        assert window.findChild(QLabel, "labelPageCount").text() == "3 Pages"

    def test_save_settings(self, qtbot, window, settings_path: Path):
        ctrl = _controller(window)
        grid = window.findChild(QComboBox, "comboGridStyle")
        for i in range(grid.count()):
            if grid.itemData(i) is GridStyle.SQUARE_GUIDE:
                grid.setCurrentIndex(i)
        window.findChild(QCheckBox, "checkShowHeader").setChecked(False)

        window.findChild(QPushButton, "buttonSaveSettings").click()

        saved = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
        assert saved["layout"]["grid_style"] == "tian-zi-ge"
        assert saved["layout"]["show_pronunciation_header"] is False
        assert ctrl.notification.text() == "Settings Saved"

    def test_saved_settings_are_restored(self, qtbot, settings_path: Path, lookup):
        from hanzi_sheet.ui.main_window import create_main_window

        settings_path.write_text(
            yaml.safe_dump({"layout": {"trace_count": 8, "top_spacing": 60}}), encoding="utf-8"
        )
        win = create_main_window(settings_path=settings_path, lookup=lookup)
        qtbot.addWidget(win)
        ctrl = _controller(win)
        assert ctrl.params.trace_count == 8
        assert ctrl.params.top_spacing == 60
        assert win.findChild(QComboBox, "comboTraceCount").currentData() == 8

    def test_clean_up(self, qtbot, window):
        ctrl = _controller(window)
        _type(qtbot, window, "你好, 你们! abc")
        window.findChild(QPushButton, "buttonCleanUp").click()
        assert window.findChild(QPlainTextEdit, "editorCharacters").toPlainText() == "你好们"
        assert ctrl.input.text == "你好们"

    def test_generate_without_characters_is_noop(self, window, export_path: Path):
        assert _controller(window).generate() is False
        assert not export_path.exists()

    def test_generate_writes_pdf(self, qtbot, window, export_path: Path):
        ctrl = _controller(window)
        _type(qtbot, window, "你好")
        button = window.findChild(QPushButton, "buttonGenerate")

        with qtbot.waitSignal(ctrl.export.exported, timeout=10_000):
            assert ctrl.generate() is True
            assert button.text() == "Generating..."
            assert not button.isEnabled()
            assert ctrl.generate() is False

        assert export_path.read_bytes().startswith(b"%PDF")
        assert button.text() == "Generate Worksheet"
        assert button.isEnabled()
        assert ctrl.notification.kind == notification.SUCCESS

    def test_generate_right_after_typing_waits_for_pinyin(
        self, qtbot, settings_path: Path, export_path: Path, lookup, monkeypatch
    ):
        from hanzi_sheet.ui.main_window import create_main_window

        def slow_lookup(text):
            time.sleep(0.3)
            return lookup(text)

        win = create_main_window(
            settings_path=settings_path,
            lookup=slow_lookup,
            fonts=FontSources(),
            save_path_provider=lambda _parent, _suggested: str(export_path),
            quiet_ms=200,
        )
        qtbot.addWidget(win)
        ctrl = _controller(win)

        exported_headers = []
        request_export = ctrl.export.request_export

        def recording_request_export(path, pages, params):
            exported_headers.extend(b.pronunciation for b in character_blocks(pages))
            return request_export(path, pages, params)

        monkeypatch.setattr(ctrl.export, "request_export", recording_request_export)

        win.findChild(QPlainTextEdit, "editorCharacters").insertPlainText("你好")
        button = win.findChild(QPushButton, "buttonGenerate")
        with qtbot.waitSignal(ctrl.export.exported, timeout=10_000):
            assert ctrl.generate() is True
            assert button.text() == "Generating..."
            assert not button.isEnabled()
            assert ctrl.generate() is False

        assert exported_headers == ["nǐ", "hǎo, hào"]
        assert export_path.read_bytes().startswith(b"%PDF")
        assert button.isEnabled()
