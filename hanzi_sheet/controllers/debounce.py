from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

DEFAULT_QUIET_MS = 500


class Debouncer(QObject):
    """Coalesce rapid text changes into one `settled` emission.

    - Each `push()` restarts the quiet-interval timer; only the latest value
      is emitted.
    - While an input-method composition is active nothing is emitted; ending
      the composition restarts the timer with the latest value.
    """

    settled = pyqtSignal(str)

    def __init__(self, quiet_ms: int = DEFAULT_QUIET_MS, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._value: str = ""
        self._settled_value: str = ""
        self._composing: bool = False

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(quiet_ms)))
        self._timer.timeout.connect(self._fire)  # type: ignore

    @property
    def settled_value(self) -> str:
        return self._settled_value

    def is_pending(self) -> bool:
        """True while the latest pushed value has not been emitted yet."""
        return self._value != self._settled_value and not self._composing

    def is_composing(self) -> bool:
        return self._composing

    def push(self, value: str) -> None:
        self._value = value or ""
        if self._composing:
            return
        self._timer.start()

    def set_composing(self, composing: bool) -> None:
        composing = bool(composing)
        if composing == self._composing:
            return
        self._composing = composing
        if composing:
            self._timer.stop()
        else:
            self._timer.start()

    def flush(self) -> None:
        """Emit the latest value now (unless composing)."""
        if self._composing:
            return
        self._timer.stop()
        self._fire()

    def _fire(self) -> None:
        self._settled_value = self._value
        self.settled.emit(self._value)
