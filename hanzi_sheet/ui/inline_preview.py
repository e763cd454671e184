from __future__ import annotations

"""Inline pinyin preview.

Qt rich text has no <ruby>, so each line of characters becomes a two-row table:
readings on top, characters below. Non-ideographs get an empty reading cell.
"""

import html
from typing import Sequence

from hanzi_sheet.domain.annotation_types import CharacterAnnotation
from hanzi_sheet.domain.hanzi_unicode import is_qualifying_char

CHARS_PER_LINE = 12


def _cell(text: str, css: str) -> str:
    return '<td align="center" style="{}">{}</td>'.format(css, html.escape(text) or "&nbsp;")


def inline_preview_html(per_position: Sequence[CharacterAnnotation], *, per_line: int = CHARS_PER_LINE) -> str:
    if not per_position:
        return ""
    tables: list[str] = []
    items = list(per_position)
    for start in range(0, len(items), max(1, int(per_line))):
        chunk = items[start:start + per_line]
        top = "".join(
            _cell(a.pronunciation if is_qualifying_char(a.char) else "", "font-size: 9pt; color: #56ab91;")
            for a in chunk
        )
        bottom = "".join(_cell(a.char, "font-size: 18pt;") for a in chunk)
        tables.append(
            '<table cellspacing="2" cellpadding="1"><tr>{}</tr><tr>{}</tr></table>'.format(top, bottom)
        )
    return "".join(tables)
