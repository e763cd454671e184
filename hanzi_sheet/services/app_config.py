"""
Application paths and environment switches.

Environment variables (all optional):
  HANZI_SHEET_SETTINGS     path of settings.yaml
  HANZI_SHEET_CJK_FONT     TTF used for hanzi glyphs in exported PDFs
  HANZI_SHEET_PINYIN_FONT  TTF used for pinyin headers in exported PDFs
  HANZI_SHEET_DICTIONARY   YAML dictionary used instead of pypinyin
  HANZI_SHEET_DEBUG        "1"/"true" enables DEBUG logging
"""
from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CJK_FONT_NAME = "KaiTi_GB2312.ttf"
DEFAULT_PINYIN_FONT_NAME = "InterTight-Regular.ttf"
DEFAULT_EXPORT_FILENAME = "chinese-worksheet.pdf"


def project_root() -> Path:
    """Directory containing main.py (two levels above this file's package)."""
    return Path(__file__).resolve().parents[2]


def _env_path(name: str) -> Path | None:
    v = (os.environ.get(name) or "").strip()
    return Path(v) if v else None


def settings_path() -> Path:
    return _env_path("HANZI_SHEET_SETTINGS") or project_root() / "settings.yaml"


def fonts_dir() -> Path:
    return project_root() / "assets" / "fonts"


def cjk_font_path() -> Path:
    return _env_path("HANZI_SHEET_CJK_FONT") or fonts_dir() / DEFAULT_CJK_FONT_NAME


def pinyin_font_path() -> Path:
    return _env_path("HANZI_SHEET_PINYIN_FONT") or fonts_dir() / DEFAULT_PINYIN_FONT_NAME


def dictionary_path() -> Path | None:
    return _env_path("HANZI_SHEET_DICTIONARY")


def debug_enabled() -> bool:
    return str(os.environ.get("HANZI_SHEET_DEBUG", "")).strip().lower() in ("1", "true", "yes", "on")
