from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CharacterAnnotation:
    """Pronunciation data for one character.

    `pronunciation` is the reading shown inline; `all_pronunciations` is the
    full candidate list printed on the worksheet header.
    """

    char: str
    pronunciation: str = ""
    all_pronunciations: tuple[str, ...] = ()

    @classmethod
    def empty(cls, char: str) -> "CharacterAnnotation":
        return cls(char=char)


@dataclass(frozen=True)
class AnnotationResult:
    per_position: tuple[CharacterAnnotation, ...] = ()
    per_unique_char: dict[str, CharacterAnnotation] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.per_position
