from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from PyQt6.QtWidgets import QCheckBox, QFileDialog, QLabel, QPlainTextEdit, QPushButton, QWidget

from hanzi_sheet.controllers.annotation_controller import AnnotationController
from hanzi_sheet.controllers.export_controller import ExportController
from hanzi_sheet.controllers.input_controller import InputController
from hanzi_sheet.controllers.settings_ui_controller import SettingsUiController
from hanzi_sheet.domain.annotation_types import AnnotationResult
from hanzi_sheet.domain.hanzi_unicode import contains_qualifying, qualifying_chars, sanitize_input
from hanzi_sheet.domain.input_limit import counter_text
from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.domain.pagination import Page, character_blocks, paginate
from hanzi_sheet.services import app_config
from hanzi_sheet.services.pdf_export import FontSources
from hanzi_sheet.services.pronunciation_lookup import PronunciationLookup, default_lookup
from hanzi_sheet.services.settings_store import SettingsStore
from hanzi_sheet.ui import notification
from hanzi_sheet.ui.inline_preview import inline_preview_html
from hanzi_sheet.ui.notification import NotificationPopup
from hanzi_sheet.ui.worksheet_preview import WorksheetPreview

logger = logging.getLogger(__name__)

GENERATE_TEXT = "Generate Worksheet"
GENERATING_TEXT = "Generating..."
HEADER_LABEL_WITH_TEXT = "Show Pinyin"
HEADER_LABEL_EMPTY = "Pinyin Space"

SavePathProvider = Callable[[QWidget, str], Optional[str]]


def ask_save_path(parent: QWidget, suggested: str) -> Optional[str]:
    path, _ = QFileDialog.getSaveFileName(parent, "Save Worksheet", suggested, "PDF Files (*.pdf)")
    return path or None


def _require(window: QWidget, cls, name: str):
    w = window.findChild(cls, name)
    if w is None:
        raise RuntimeError(f"{name} not found (expected {cls.__name__})")
    return w


def page_count_text(n: int) -> str:
    return "{} Page{}".format(n, "" if n == 1 else "s")


class MainWindowController:
    """Owns UI wiring and coordination for the main window.

    Data flow: editor -> (limit, debounce) -> annotation -> paginate ->
    preview; the Generate button exports exactly the pages on screen.
    """

    def __init__(
        self,
        window: QWidget,
        *,
        settings_path: str | Path | None = None,
        lookup: Optional[PronunciationLookup] = None,
        fonts: Optional[FontSources] = None,
        save_path_provider: SavePathProvider = ask_save_path,
        quiet_ms: Optional[int] = None,
    ) -> None:
        self.window = window
        self._store = SettingsStore(settings_path)
        self._save_path_provider = save_path_provider
        self._pages: tuple[Page, ...] = ()
        self._params = LayoutParameters()
        self._deferred_export: Optional[str] = None

        self.editor: QPlainTextEdit = _require(window, QPlainTextEdit, "editorCharacters")
        self.label_counter: QLabel = _require(window, QLabel, "labelCharCounter")
        self.label_pages: QLabel = _require(window, QLabel, "labelPageCount")
        self.label_updating: QLabel = _require(window, QLabel, "labelUpdating")
        self.label_inline: QLabel = _require(window, QLabel, "labelInlinePinyin")
        self.button_generate: QPushButton = _require(window, QPushButton, "buttonGenerate")
        self.button_clean_up: QPushButton = _require(window, QPushButton, "buttonCleanUp")
        self.check_header: QCheckBox = _require(window, QCheckBox, "checkShowHeader")
        self.preview: WorksheetPreview = _require(window, WorksheetPreview, "worksheetPreview")
        self.notification: NotificationPopup = _require(window, NotificationPopup, "notificationPopup")

        if quiet_ms is None:
            self.input = InputController(self.editor)
        else:
            self.input = InputController(self.editor, quiet_ms=quiet_ms)
        self.annotation = AnnotationController(lookup or default_lookup(app_config.dictionary_path()))
        self.export = ExportController(fonts=fonts)
        self.settings = SettingsUiController(
            window=window,
            settings_store=self._store,
            on_changed=self._on_params_changed,
            on_saved=lambda msg: self.notification.show_message(msg, notification.SUCCESS),
        )

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def wire(self) -> None:
        self.input.text_accepted.connect(self._on_text_accepted)
        self.input.settled.connect(self._on_settled)
        self.input.limit_exceeded.connect(self._on_limit_exceeded)
        self.input.limit_cleared.connect(self._on_limit_cleared)

        self.annotation.annotated.connect(self._on_annotated)
        self.annotation.loading_changed.connect(lambda _loading: self._refresh_updating())

        self.export.busy_changed.connect(self._on_export_busy)
        self.export.exported.connect(self._on_exported)
        self.export.failed.connect(self._on_export_failed)

        self.button_generate.clicked.connect(self.generate)  # type: ignore
        self.button_clean_up.clicked.connect(self.clean_up)  # type: ignore

        self.settings.wire()
        self._params = self.settings.apply_persisted_settings()

        self._on_text_accepted(self.input.text)
        self.recompute_pages()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def pages(self) -> tuple[Page, ...]:
        return self._pages

    @property
    def params(self) -> LayoutParameters:
        return self._params

    def recompute_pages(self) -> tuple[Page, ...]:
        text = self.input.debouncer.settled_value
        result = self.annotation.result
        self._pages = paginate(qualifying_chars(text), result.per_unique_char, self._params)
        self.preview.set_pages(self._pages, self._params)
        self.label_pages.setText(page_count_text(len(self._pages)))
        logger.debug("Layout: %d page(s) for %r", len(self._pages), text)
        return self._pages

    def _refresh_updating(self) -> None:
        self.label_updating.setVisible(self.input.is_updating() or self.annotation.is_loading())

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def _on_text_accepted(self, text: str) -> None:
        self.label_counter.setText(counter_text(text))
        self.check_header.setText(HEADER_LABEL_WITH_TEXT if contains_qualifying(text) else HEADER_LABEL_EMPTY)
        self._refresh_updating()

    def _on_settled(self, text: str) -> None:
        self.annotation.request(text)
        self.recompute_pages()
        self._refresh_updating()

    def _on_annotated(self, result: AnnotationResult) -> None:
        self.label_inline.setText(inline_preview_html(result.per_position))
        self.recompute_pages()
        self._refresh_updating()
        self._run_deferred_export()

    def _on_params_changed(self, params: LayoutParameters) -> None:
        self._params = params
        self.recompute_pages()

    def _on_limit_exceeded(self, message: str) -> None:
        self.notification.show_message(message, notification.ERROR)

    def _on_limit_cleared(self) -> None:
        if self.notification.kind == notification.ERROR:
            self.notification.clear_message()

    def clean_up(self) -> None:
        cleaned = sanitize_input(self.input.text)
        if cleaned != self.input.text:
            logger.info("Clean Up: %d -> %d character(s)", len(self.input.text), len(cleaned))
            self.input.set_text(cleaned)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def generate(self) -> bool:
        """Ask for a path and export the current pages.

        If a pronunciation lookup is still running, the export is held until
        its result lands so the headers are never printed empty.
        """
        if self.export.is_busy() or self._deferred_export is not None:
            logger.info("Generate ignored: export in progress")
            return False
        if self.input.is_updating():
            self.input.debouncer.flush()
        if not character_blocks(self._pages):
            logger.info("Generate ignored: no characters")
            return False

        path = self._save_path_provider(self.window, app_config.DEFAULT_EXPORT_FILENAME)
        if not path:
            return False

        if self.annotation.is_loading():
            logger.info("Export waiting for pronunciations")
            self._deferred_export = path
            self._on_export_busy(True)
            return True
        return self.export.request_export(path, self._pages, self._params)

    def _run_deferred_export(self) -> None:
        path, self._deferred_export = self._deferred_export, None
        if path is None:
            return
        if not character_blocks(self._pages) or not self.export.request_export(path, self._pages, self._params):
            self._on_export_busy(False)

    def _on_export_busy(self, busy: bool) -> None:
        self.button_generate.setEnabled(not busy)
        self.button_generate.setText(GENERATING_TEXT if busy else GENERATE_TEXT)

    def _on_exported(self, path: object) -> None:
        self.notification.show_message("Saved {}".format(Path(str(path)).name), notification.SUCCESS)

    def _on_export_failed(self, message: str) -> None:
        self.notification.show_message("Export failed: {}".format(message), notification.ERROR)
