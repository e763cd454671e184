from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.domain.pagination import Page
from hanzi_sheet.services.pdf_export import ExportError, FontSources, export_to_file

logger = logging.getLogger(__name__)


class _ExportSignals(QObject):
    done = pyqtSignal(object)   # Path | None
    error = pyqtSignal(str)


class _ExportTask(QRunnable):
    def __init__(self, path: Path, pages: Sequence[Page], params: LayoutParameters, fonts: FontSources) -> None:
        super().__init__()
        self.path = path
        self.pages = tuple(pages)
        self.params = params
        self.fonts = fonts
        self.signals = _ExportSignals()

    def run(self) -> None:
        try:
            written = export_to_file(self.path, self.pages, self.params, fonts=self.fonts)
        except ExportError as e:
            self.signals.error.emit(str(e))
            return
        self.signals.done.emit(written)


class ExportController(QObject):
    """Runs at most one PDF export at a time.

    Requests made while an export is in flight are ignored. `busy_changed`
    lets the UI show a "Generating..." state for the whole duration.
    """

    busy_changed = pyqtSignal(bool)
    exported = pyqtSignal(object)  # Path
    failed = pyqtSignal(str)

    def __init__(
        self,
        *,
        fonts: Optional[FontSources] = None,
        pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._fonts = fonts or FontSources.from_config()
        self._pool = pool or QThreadPool.globalInstance()
        self._busy = False
        self._task: Optional[_ExportTask] = None

    def is_busy(self) -> bool:
        return self._busy

    def request_export(self, path: str | Path, pages: Sequence[Page], params: LayoutParameters) -> bool:
        """Start an export; returns False if it was ignored."""
        if self._busy:
            logger.info("Export already in progress; request ignored")
            return False
        if not pages:
            logger.info("Nothing to export")
            return False

        task = _ExportTask(Path(path), pages, params, self._fonts)
        task.signals.done.connect(self._on_done)
        task.signals.error.connect(self._on_error)
        self._task = task
        self._set_busy(True)
        self._pool.start(task)
        return True

    def _on_done(self, written: object) -> None:
        self._task = None
        self._set_busy(False)
        if written is not None:
            self.exported.emit(written)

    def _on_error(self, message: str) -> None:
        logger.error("Export failed: %s", message)
        self._task = None
        self._set_busy(False)
        self.failed.emit(message)

    def _set_busy(self, busy: bool) -> None:
        if busy != self._busy:
            self._busy = busy
            self.busy_changed.emit(busy)
