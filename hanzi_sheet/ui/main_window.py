"""Main window factory.

This module owns construction of the application's main window widgets.

Public API:
- build_main_window(): builds and returns the (unwired) window.
- create_main_window(): builds, wires and returns the window (no app.exec()).

Design notes:
- Widgets are created in code and addressed by objectName, so controllers
  and tests can find them with `findChild(...)`.
- Wiring lives in `hanzi_sheet.controllers.main_window_controller`; QApplication
  creation and app.exec() stay in `main.py`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from hanzi_sheet.controllers.main_window_controller import MainWindowController
from hanzi_sheet.domain.enums import GridStyle, TopSpacing, TraceOpacity
from hanzi_sheet.domain.input_limit import MAX_CHARACTERS
from hanzi_sheet.domain.layout_params import ROWS_PER_CHARACTER_OPTIONS, TRACE_COUNT_OPTIONS
from hanzi_sheet.services.pdf_export import FontSources
from hanzi_sheet.services.pronunciation_lookup import PronunciationLookup
from hanzi_sheet.ui.notification import NotificationPopup
from hanzi_sheet.ui.worksheet_preview import WorksheetPreview

WINDOW_TITLE = "Chinese Toolkit"


def _combo(name: str, items: list[tuple[str, object]], parent: QWidget) -> QComboBox:
    combo = QComboBox(parent)
    combo.setObjectName(name)
    for label, data in items:
        combo.addItem(label, data)
    return combo


def _labeled(title: str, widget: QWidget, parent: QWidget) -> QWidget:
    col = QWidget(parent)
    lay = QVBoxLayout(col)
    lay.setContentsMargins(0, 0, 0, 0)
    lay.setSpacing(2)
    lbl = QLabel(title, col)
    lbl.setStyleSheet("font-weight: 600;")
    lay.addWidget(lbl)
    lay.addWidget(widget)
    return col


def build_main_window() -> QMainWindow:
    window = QMainWindow()
    window.setObjectName("MainWindow")
    window.setWindowTitle(WINDOW_TITLE)

    central = QWidget(window)
    root = QVBoxLayout(central)

    title = QLabel(WINDOW_TITLE, central)
    title.setObjectName("labelTitle")
    title.setStyleSheet("font-size: 20pt; font-weight: 700;")
    root.addWidget(title)

    notification = NotificationPopup(central)
    root.addWidget(notification, 0, Qt.AlignmentFlag.AlignHCenter)

    editor = QPlainTextEdit(central)
    editor.setObjectName("editorCharacters")
    editor.setPlaceholderText("Enter up to {} characters".format(MAX_CHARACTERS))
    editor.setMaximumHeight(80)
    root.addWidget(editor)

    counters = QHBoxLayout()
    page_count = QLabel(central)
    page_count.setObjectName("labelPageCount")
    char_counter = QLabel(central)
    char_counter.setObjectName("labelCharCounter")
    counters.addWidget(page_count)
    counters.addStretch(1)
    counters.addWidget(char_counter)
    root.addLayout(counters)

    inline = QLabel(central)
    inline.setObjectName("labelInlinePinyin")
    inline.setTextFormat(Qt.TextFormat.RichText)
    inline.setWordWrap(True)
    root.addWidget(inline)

    buttons = QHBoxLayout()
    generate = QPushButton("Generate Worksheet", central)
    generate.setObjectName("buttonGenerate")
    clean_up = QPushButton("Clean Up", central)
    clean_up.setObjectName("buttonCleanUp")
    save = QPushButton("Save Settings", central)
    save.setObjectName("buttonSaveSettings")
    buttons.addWidget(generate)
    buttons.addWidget(clean_up)
    buttons.addWidget(save)
    root.addLayout(buttons)

    options = QGridLayout()
    trace = _combo("comboTraceCount", [(str(n), n) for n in TRACE_COUNT_OPTIONS], central)
    rows = _combo("comboRowsPerChar", [(str(n), n) for n in ROWS_PER_CHARACTER_OPTIONS], central)
    grid = _combo("comboGridStyle", [(g.label, g) for g in GridStyle], central)
    opacity = _combo("comboTraceOpacity", [(t.label, t) for t in TraceOpacity], central)
    spacing = _combo("comboSpacing", [(s.label, s.value) for s in TopSpacing], central)
    show_header = QCheckBox("Pinyin Space", central)
    show_header.setObjectName("checkShowHeader")

    options.addWidget(_labeled("Traceable Copies", trace, central), 0, 0)
    options.addWidget(_labeled("Rows per Char", rows, central), 0, 1)
    options.addWidget(_labeled("Grid Style", grid, central), 0, 2)
    options.addWidget(_labeled("Trace Opacity", opacity, central), 1, 0)
    options.addWidget(_labeled("Spacing", spacing, central), 1, 1)
    options.addWidget(show_header, 1, 2)
    root.addLayout(options)

    updating = QLabel("Updating preview...", central)
    updating.setObjectName("labelUpdating")
    updating.setVisible(False)
    root.addWidget(updating)

    preview = WorksheetPreview()
    scroll = QScrollArea(central)
    scroll.setObjectName("scrollPreview")
    scroll.setWidgetResizable(True)
    scroll.setWidget(preview)
    root.addWidget(scroll, 1)

    window.setCentralWidget(central)
    window.resize(900, 1000)
    return window


@dataclass(frozen=True)
class MainWindowHandles:
    """Stable handles that tests may need (stored on `window._handles`)."""

    controller: MainWindowController
    preview: WorksheetPreview
    notification: NotificationPopup


def create_main_window(
    *,
    expose_handles: bool = True,
    settings_path: str | Path | None = None,
    lookup: Optional[PronunciationLookup] = None,
    fonts: Optional[FontSources] = None,
    **controller_kwargs: Any,
) -> QMainWindow:
    """Create, wire and return the application's main window.

    This function must NOT call app.exec(). It assumes a QApplication exists.

    Args:
        expose_handles: If True, attaches `window._handles` for tests.
        settings_path: Optional settings.yaml to load layout options from.
        lookup: Pronunciation lookup; defaults to pypinyin (or the configured
            dictionary).
        fonts: Font files for PDF export; defaults to the configured paths.
    """
    window = build_main_window()
    window.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, False)

    controller = MainWindowController(
        window,
        settings_path=settings_path,
        lookup=lookup,
        fonts=fonts,
        **controller_kwargs,
    )
    controller.wire()

    # Keep a strong ref; the controller owns QObjects parented elsewhere.
    window._controller = controller  # type: ignore[attr-defined]
    if expose_handles:
        window._handles = MainWindowHandles(  # type: ignore[attr-defined]
            controller=controller,
            preview=controller.preview,
            notification=controller.notification,
        )
    return window
