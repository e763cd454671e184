from __future__ import annotations

"""Context disambiguation for the structural particles 的 / 地 / 得.

A dictionary lists several readings for these characters and puts the
full-tone one first for some of them (地 -> dì, 得 -> dé). When the character
is used as a grammatical particle it takes the neutral tone "de".

The rules are pattern heuristics, not a grammar:

  1. Reduplication: the two preceding characters are the same ideograph
     (慢慢地, 好好的, 高高兴兴地 ends in 兴兴).
  2. Neighbour pattern: the previous character is an ideograph and the next
     one is an ideograph, punctuation or the end of the text, unless the
     particle forms a known word with a neighbour (目的, 的确, 地方, 得到 ...).

Anything else keeps the first dictionary candidate.
"""

from typing import Final, Optional, Sequence

from hanzi_sheet.domain.hanzi_unicode import is_qualifying_char

NEUTRAL_READING: Final[dict[str, str]] = {
    "的": "de",
    "地": "de",
    "得": "de",
}

# Words in which the particle character keeps its full tone, keyed by particle.
_LEXICAL_WORDS: Final[dict[str, tuple[str, ...]]] = {
    "的": ("的确", "的士", "目的", "标的", "有的放矢"),
    "地": (
        "地方", "地区", "地球", "地图", "地铁", "地址", "地点", "地上", "地下",
        "地面", "地板", "地位", "地震", "地理", "土地", "天地", "大地", "各地",
        "本地", "当地", "外地", "场地", "草地", "基地", "陆地", "境地", "田地",
        "心地", "墓地",
    ),
    "得": (
        "得到", "得分", "得意", "得罪", "得失", "得奖", "得病", "得知", "得以",
        "获得", "取得", "难得", "心得", "值得", "只得", "不得不",
    ),
}

# particle -> ((word, offset of the particle inside the word), ...)
_WORD_OFFSETS: Final[dict[str, tuple[tuple[str, int], ...]]] = {
    particle: tuple(
        (word, offset)
        for word in words
        for offset, ch in enumerate(word)
        if ch == particle
    )
    for particle, words in _LEXICAL_WORDS.items()
}


def is_particle(ch: str) -> bool:
    return ch in NEUTRAL_READING


def _forms_word(text: str, index: int) -> bool:
    """True if the character at `index` belongs to a listed full-tone word."""
    for word, offset in _WORD_OFFSETS.get(text[index], ()):
        start = index - offset
        if start >= 0 and text[start:start + len(word)] == word:
            return True
    return False


def _is_reduplicated_before(text: str, index: int) -> bool:
    if index < 2:
        return False
    a, b = text[index - 2], text[index - 1]
    return a == b and is_qualifying_char(a)


def contextual_reading(text: str, index: int, candidates: Sequence[str]) -> Optional[str]:
    """Return the context-selected reading for `text[index]`, or None.

    None means "no override": callers keep their default (first) candidate.
    """
    ch = text[index]
    neutral = NEUTRAL_READING.get(ch)
    if neutral is None:
        return None

    # Only choose a reading the dictionary actually lists for this character.
    if candidates and neutral not in candidates:
        return None

    if _is_reduplicated_before(text, index):
        return neutral

    if _forms_word(text, index):
        return None

    prev_ok = index > 0 and is_qualifying_char(text[index - 1])
    if not prev_ok:
        return None
    nxt = text[index + 1] if index + 1 < len(text) else ""
    if nxt == "" or is_qualifying_char(nxt) or not nxt.isalnum():
        return neutral
    return None
