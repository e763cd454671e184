from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QLabel, QWidget

SUCCESS = "success"
ERROR = "error"

_STYLES = {
    SUCCESS: "background: #56ab91; color: #ffffff; padding: 6px 12px; border-radius: 6px;",
    ERROR: "background: #c0392b; color: #ffffff; padding: 6px 12px; border-radius: 6px;",
}


class NotificationPopup(QLabel):
    """Transient message label that hides itself after `timeout_ms`.

    A new message replaces the current one and restarts the timer.
    """

    def __init__(self, parent: Optional[QWidget] = None, *, timeout_ms: int = 3000) -> None:
        super().__init__(parent)
        self.setObjectName("notificationPopup")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._kind: Optional[str] = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(timeout_ms))
        self._timer.timeout.connect(self.clear_message)  # type: ignore
        self.hide()

    @property
    def kind(self) -> Optional[str]:
        return self._kind

    def show_message(self, text: str, kind: str = SUCCESS) -> None:
        self._kind = kind
        self.setText(text)
        self.setStyleSheet(_STYLES.get(kind, _STYLES[SUCCESS]))
        self.show()
        self.raise_()
        self._timer.start()

    def clear_message(self) -> None:
        self._timer.stop()
        self._kind = None
        self.setText("")
        self.hide()
