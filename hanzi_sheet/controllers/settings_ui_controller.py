from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Optional

from PyQt6.QtWidgets import QCheckBox, QComboBox, QPushButton, QWidget

from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "Settings Saved"

# objectName -> LayoutParameters field
_COMBO_FIELDS: dict[str, str] = {
    "comboTraceCount": "trace_count",
    "comboRowsPerChar": "rows_per_character",
    "comboGridStyle": "grid_style",
    "comboTraceOpacity": "trace_opacity",
    "comboSpacing": "top_spacing",
}


class SettingsUiController:
    """Owns the layout option widgets (combos + header checkbox + persistence).

    The widgets hold the only mutable copy of the options; `current()` reads
    them back into an immutable `LayoutParameters`.
    """

    def __init__(
        self,
        *,
        window: QWidget,
        settings_store: SettingsStore,
        on_changed: Optional[Callable[[LayoutParameters], None]] = None,
        on_saved: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._window = window
        self._store = settings_store
        self._on_changed = on_changed
        self._on_saved = on_saved
        self._params = LayoutParameters()
        self._applying = False

        self._combos: dict[str, QComboBox] = {}
        for name, field in _COMBO_FIELDS.items():
            combo = window.findChild(QComboBox, name)
            if combo is None:
                raise RuntimeError(f"{name} not found (expected QComboBox)")
            self._combos[field] = combo

        check = window.findChild(QCheckBox, "checkShowHeader")
        if check is None:
            raise RuntimeError("checkShowHeader not found (expected QCheckBox)")
        self._check_header = check
        self._button_save = window.findChild(QPushButton, "buttonSaveSettings")

    def wire(self) -> None:
        for combo in self._combos.values():
            combo.currentIndexChanged.connect(self._on_widget_changed)  # type: ignore
        self._check_header.toggled.connect(self._on_widget_changed)  # type: ignore
        if self._button_save is not None:
            self._button_save.clicked.connect(self.save)  # type: ignore

    def current(self) -> LayoutParameters:
        return self._params

    def apply_persisted_settings(self) -> LayoutParameters:
        params = self._store.load_layout_parameters()
        self.apply(params)
        return params

    def apply(self, params: LayoutParameters) -> None:
        """Push `params` into the widgets without emitting per-widget changes."""
        self._applying = True
        try:
            for field, combo in self._combos.items():
                _select_data(combo, getattr(params, field))
            self._check_header.setChecked(bool(params.show_pronunciation_header))
        finally:
            self._applying = False
        self._params = params
        self._notify()

    def save(self) -> None:
        self._store.save_layout_parameters(self._params)
        logger.info("Layout settings saved to %s", self._store.path)
        if self._on_saved is not None:
            self._on_saved(SAVED_MESSAGE)

    def _read_widgets(self) -> LayoutParameters:
        values: dict[str, Any] = {}
        for field, combo in self._combos.items():
            data = combo.currentData()
            if data is not None:
                values[field] = data
        values["show_pronunciation_header"] = self._check_header.isChecked()
        try:
            return dataclasses.replace(self._params, **values)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring invalid option value: %s", e)
            return self._params

    def _on_widget_changed(self, *_args: object) -> None:
        if self._applying:
            return
        params = self._read_widgets()
        if params == self._params:
            return
        self._params = params
        self._notify()

    def _notify(self) -> None:
        if self._on_changed is not None:
            self._on_changed(self._params)


def _select_data(combo: QComboBox, value: Any) -> None:
    for i in range(combo.count()):
        if combo.itemData(i) == value:
            combo.setCurrentIndex(i)
            return
    logger.debug("%s has no item for %r", combo.objectName(), value)
