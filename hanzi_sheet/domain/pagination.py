from __future__ import annotations

"""Pagination of character blocks onto fixed-height pages.

This module is *domain* logic (no Qt dependencies). It is the single source of
truth for which block lands on which page; both the on-screen preview and the
PDF export consume its output unchanged.
"""

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from hanzi_sheet.domain.annotation_types import CharacterAnnotation
from hanzi_sheet.domain.enums import BlockKind
from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.domain.page_geometry import CONTENT_HEIGHT_PT, block_height


@dataclass(frozen=True)
class Block:
    """One placement unit on a page: a character occurrence or blank filler."""

    kind: BlockKind
    char: Optional[str]
    pronunciation: str
    sequence_key: str

    @property
    def is_character(self) -> bool:
        return self.kind is BlockKind.CHARACTER


Page = tuple[Block, ...]


def _header_text(annotation: Optional[CharacterAnnotation]) -> str:
    if annotation is None:
        return ""
    if annotation.all_pronunciations:
        return ", ".join(annotation.all_pronunciations)
    return annotation.pronunciation or ""


def character_block(char: str, index: int, annotation: Optional[CharacterAnnotation]) -> Block:
    return Block(
        kind=BlockKind.CHARACTER,
        char=char,
        pronunciation=_header_text(annotation),
        sequence_key="char-{}-{}".format(char, index),
    )


def blank_block(page_index: int, i: int) -> Block:
    return Block(
        kind=BlockKind.BLANK,
        char=None,
        pronunciation="",
        sequence_key="blank-{}-{}".format(page_index, i),
    )


def paginate(
    qualifying_chars: Sequence[str],
    annotations_by_char: Mapping[str, CharacterAnnotation],
    params: LayoutParameters,
) -> tuple[Page, ...]:
    """Partition characters into pages of blocks.

    Greedy packing in input order. A page is closed before an addition would
    push it past the content height, but only if it already holds a block, so
    a block taller than the page still gets a page of its own.

    The last page is padded with blank blocks to fill its remaining height.
    With no characters the result is a single, fully blank page.
    """
    height = block_height(params)
    max_height = CONTENT_HEIGHT_PT

    pages: list[list[Block]] = [[]]
    current_height = 0.0

    for index, char in enumerate(qualifying_chars):
        if current_height + height > max_height and current_height > 0:
            pages.append([])
            current_height = 0.0
        pages[-1].append(character_block(char, index, annotations_by_char.get(char)))
        current_height += height

    last_index = len(pages) - 1
    last_page = pages[last_index]
    remaining = max_height - len(last_page) * height
    fill = max(0, math.floor(remaining / height))
    last_page.extend(blank_block(last_index, i) for i in range(fill))

    return tuple(tuple(page) for page in pages if page)


def page_height(page: Page, params: LayoutParameters) -> float:
    return len(page) * block_height(params)


def character_blocks(pages: Sequence[Page]) -> list[Block]:
    """All character blocks across `pages`, in order."""
    return [b for page in pages for b in page if b.is_character]
