from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QEvent, QObject, pyqtSignal
from PyQt6.QtGui import QInputMethodEvent
from PyQt6.QtWidgets import QPlainTextEdit

from hanzi_sheet.controllers.debounce import DEFAULT_QUIET_MS, Debouncer
from hanzi_sheet.domain.input_limit import MAX_CHARACTERS, decide_input

logger = logging.getLogger(__name__)


class InputController(QObject):
    """Owns the character text box.

    Enforces the character limit on every edit, tracks IME composition and
    forwards accepted text to a `Debouncer`.
    """

    text_accepted = pyqtSignal(str)
    settled = pyqtSignal(str)
    limit_exceeded = pyqtSignal(str)
    limit_cleared = pyqtSignal()

    def __init__(
        self,
        editor: QPlainTextEdit,
        *,
        quiet_ms: int = DEFAULT_QUIET_MS,
        limit: int = MAX_CHARACTERS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._editor = editor
        self._limit = int(limit)
        self._text: str = editor.toPlainText()
        self._limit_active: bool = False

        self._debouncer = Debouncer(quiet_ms, self)
        self._debouncer.settled.connect(self.settled)

        editor.textChanged.connect(self._on_text_changed)  # type: ignore
        editor.installEventFilter(self)

    @property
    def text(self) -> str:
        return self._text

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    def is_updating(self) -> bool:
        return self._debouncer.is_pending()

    def set_text(self, text: str) -> None:
        """Programmatic replacement (Clean Up); subject to the same limit."""
        self._editor.setPlainText(text or "")

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: N802
        if obj is self._editor and event.type() == QEvent.Type.InputMethod:
            if isinstance(event, QInputMethodEvent):
                self._debouncer.set_composing(bool(event.preeditString()))
        return False

    def _on_text_changed(self) -> None:
        proposed = self._editor.toPlainText()
        if proposed == self._text:
            return

        decision = decide_input(self._text, proposed, limit=self._limit)
        if not decision.accepted:
            self._revert(len(proposed) - len(self._text))
            if decision.warning:
                logger.info("Input rejected: %s", decision.warning)
                self.limit_exceeded.emit(decision.warning)
            return

        self._text = decision.value
        if self._limit_active:
            self._limit_active = False
            self.limit_cleared.emit()
        self._debouncer.push(self._text)
        self.text_accepted.emit(self._text)

    def _revert(self, inserted: int) -> None:
        pos = self._editor.textCursor().position() - max(0, inserted)
        self._editor.blockSignals(True)
        try:
            self._editor.setPlainText(self._text)
            c = self._editor.textCursor()
            c.setPosition(max(0, min(pos, len(self._text))))
            self._editor.setTextCursor(c)
        finally:
            self._editor.blockSignals(False)
        self._limit_active = True
