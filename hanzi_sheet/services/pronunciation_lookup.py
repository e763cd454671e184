from __future__ import annotations

"""Pronunciation lookup collaborators.

A lookup is any callable `lookup(text) -> Mapping[str, Sequence[str]]` that
maps each ideograph of `text` to its candidate readings, most common first.
Characters the backend does not know map to an empty list; they never make
the whole call fail.

Two implementations ship with the app:

  - `PinyinLookup`: pypinyin, tone-mark style, all heteronyms.
  - `DictionaryLookup`: a static dictionary, usually loaded from YAML.
"""

import logging
import re
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

import yaml
from pypinyin import Style, pinyin

from hanzi_sheet.domain.hanzi_unicode import is_qualifying_char, unique_in_order

logger = logging.getLogger(__name__)

PronunciationLookup = Callable[[str], Mapping[str, Sequence[str]]]

_SPLIT_READINGS = re.compile(r"[,，/;；\s]+")


class PinyinLookup:
    """pypinyin-backed lookup (the default)."""

    def __init__(self, style: Style = Style.TONE) -> None:
        self._style = style

    def __call__(self, text: str) -> dict[str, list[str]]:
        out: dict[str, list[str]] = {}
        for ch in unique_in_order(c for c in (text or "") if is_qualifying_char(c)):
            rows = pinyin(ch, style=self._style, heteronym=True, errors="ignore")
            candidates = rows[0] if rows else []
            out[ch] = unique_in_order(c for c in candidates if c)
        return out


class DictionaryLookup:
    """Static dictionary lookup.

    Accepted entry shapes (tolerant, malformed entries are skipped):

        好: ["hǎo", "hào"]
        好: "hǎo, hào"
        好: {pinyin: "hǎo, hào", definition: "good"}
    """

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        self._entries: dict[str, list[str]] = {}
        for ch, value in (entries or {}).items():
            readings = self._readings(value)
            if isinstance(ch, str) and readings:
                self._entries[ch] = readings

    @staticmethod
    def _readings(value: Any) -> list[str]:
        if isinstance(value, dict):
            value = value.get("pinyin")
        if isinstance(value, str):
            return [s for s in _SPLIT_READINGS.split(value.strip()) if s]
        if isinstance(value, (list, tuple)):
            return [str(s).strip() for s in value if isinstance(s, str) and s.strip()]
        return []

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DictionaryLookup":
        p = Path(path)
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8"))
        except (OSError, UnicodeError, yaml.YAMLError) as e:
            logger.warning("Dictionary %s could not be loaded: %s", p, e)
            data = None
        if not isinstance(data, dict):
            data = {}
        return cls(data)

    def __len__(self) -> int:
        return len(self._entries)

    def __call__(self, text: str) -> dict[str, list[str]]:
        return {
            ch: list(self._entries.get(ch, []))
            for ch in unique_in_order(c for c in (text or "") if is_qualifying_char(c))
        }


def default_lookup(dictionary_path: str | Path | None = None) -> PronunciationLookup:
    """Static dictionary when a path is configured, pypinyin otherwise."""
    if dictionary_path is not None and Path(dictionary_path).is_file():
        lookup = DictionaryLookup.from_yaml(dictionary_path)
        if len(lookup):
            logger.info("Using static dictionary %s (%d entries)", dictionary_path, len(lookup))
            return lookup
    return PinyinLookup()
