from __future__ import annotations

"""Pronunciation annotation pipeline.

`annotate()` turns raw input into two views:

  - `per_position`: one entry per input character (including punctuation and
    Latin), with the reading chosen for its context; used for the inline
    preview.
  - `per_unique_char`: one entry per distinct ideograph with every candidate
    reading; used for the worksheet header.

The function is a pure mapping over its input and never raises: lookup
failures degrade the affected characters to empty annotations.
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from hanzi_sheet.domain.annotation_types import AnnotationResult, CharacterAnnotation
from hanzi_sheet.domain.hanzi_unicode import is_qualifying_char, qualifying_chars, unique_in_order
from hanzi_sheet.domain.particles import contextual_reading
from hanzi_sheet.services.pronunciation_lookup import PronunciationLookup

logger = logging.getLogger(__name__)


def _candidates(raw: Any) -> Optional[tuple[str, ...]]:
    """Validate one lookup entry; None means "unexpected shape"."""
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        return None
    if not all(isinstance(s, str) for s in raw):
        return None
    return tuple(s.strip() for s in raw if s.strip())


def _safe_lookup(lookup: PronunciationLookup, text: str) -> Mapping[str, Any]:
    try:
        data = lookup(text)
    except Exception as e:
        logger.warning("Pronunciation lookup failed for %r: %s", text, e)
        return {}
    if not isinstance(data, Mapping):
        logger.warning("Pronunciation lookup returned %s, expected a mapping", type(data).__name__)
        return {}
    return data


def annotate(text: str, lookup: PronunciationLookup) -> AnnotationResult:
    text = text or ""
    unique = unique_in_order(qualifying_chars(text))
    if not unique:
        return AnnotationResult(
            per_position=tuple(CharacterAnnotation.empty(c) for c in text),
            per_unique_char={},
        )

    data = _safe_lookup(lookup, text)

    per_unique: dict[str, CharacterAnnotation] = {}
    for ch in unique:
        cands = _candidates(data.get(ch, ()))
        if cands is None:
            logger.warning("Unexpected lookup entry for %r: %r", ch, data.get(ch))
            cands = ()
        per_unique[ch] = CharacterAnnotation(
            char=ch,
            pronunciation=cands[0] if cands else "",
            all_pronunciations=cands,
        )

    per_position: list[CharacterAnnotation] = []
    for i, ch in enumerate(text):
        if not is_qualifying_char(ch):
            per_position.append(CharacterAnnotation.empty(ch))
            continue
        base = per_unique[ch]
        reading = base.pronunciation
        if base.all_pronunciations:
            override = contextual_reading(text, i, base.all_pronunciations)
            if override is not None:
                reading = override
        per_position.append(
            CharacterAnnotation(char=ch, pronunciation=reading, all_pronunciations=base.all_pronunciations)
        )

    return AnnotationResult(per_position=tuple(per_position), per_unique_char=per_unique)
