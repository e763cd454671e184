from __future__ import annotations

"""Hanzi Unicode helpers.

This module is *domain* logic (no Qt dependencies).

Only the CJK Unified Ideographs block (U+4E00..U+9FFF) qualifies for grid
placement. Extension blocks and compatibility ideographs are deliberately
left out: the bundled glyph fonts do not cover them.
"""

from typing import Final, Iterable

_CJK_FIRST: Final[int] = 0x4E00
_CJK_LAST: Final[int] = 0x9FFF


def is_qualifying_char(ch: str) -> bool:
    """Return True if `ch` is a single CJK Unified Ideograph."""
    if not isinstance(ch, str) or len(ch) != 1:
        return False
    return _CJK_FIRST <= ord(ch) <= _CJK_LAST


def contains_qualifying(text: str) -> bool:
    return any(is_qualifying_char(c) for c in (text or ""))


def qualifying_chars(text: str) -> list[str]:
    """Return the qualifying characters of `text` in input order (repeats kept)."""
    return [c for c in (text or "") if is_qualifying_char(c)]


def unique_in_order(chars: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for c in chars:
        if c not in seen:
            seen.add(c)
            out.append(c)
    return out


def sanitize_input(text: str) -> str:
    """Clean up raw input: keep qualifying characters, drop repeats.

    >>> sanitize_input("你好, 你们! abc")
    '你好们'
    """
    return "".join(unique_in_order(qualifying_chars(text)))
