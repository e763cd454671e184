from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.services import app_config

logger = logging.getLogger(__name__)

LAYOUT_KEY = "layout"


class SettingsStore:
    """YAML-backed settings store.

    Responsibilities:
      - Load/save settings.yaml atomically
      - Provide typed helpers for the worksheet layout parameters

    Notes:
      - Layout parameters live under the `layout` key, one entry per field.
      - Unknown top-level keys are preserved on save.
    """

    def __init__(self, settings_path: str | Path | None = None) -> None:
        if settings_path is None:
            self._path = app_config.settings_path()
        else:
            self._path = Path(settings_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        try:
            p = self._path
            if not p.exists():
                return {}
            with p.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
                return data if isinstance(data, dict) else {}
        except (OSError, UnicodeError, yaml.YAMLError) as e:
            logger.warning("Could not read settings from %s: %s", self._path, e)
            return {}

    def save(self, data: dict[str, Any]) -> None:
        p = self._path
        tmp = p.with_suffix(p.suffix + ".tmp")
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data or {}, f, allow_unicode=True, sort_keys=True)
            os.replace(str(tmp), str(p))
        except (OSError, yaml.YAMLError) as e:
            # Best-effort persistence; callers should not crash on save failures.
            logger.warning("Failed to save settings atomically to %s: %s", p, e)
            try:
                tmp.unlink()
            except OSError:
                pass

    def load_layout_parameters(self) -> LayoutParameters:
        s = self.load()
        return LayoutParameters.from_mapping(s.get(LAYOUT_KEY))

    def save_layout_parameters(self, params: LayoutParameters) -> None:
        s = self.load()
        s[LAYOUT_KEY] = params.to_mapping()
        self.save(s)
