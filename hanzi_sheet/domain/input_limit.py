from __future__ import annotations

"""Character-limit policy for the text input."""

from dataclasses import dataclass
from typing import Final, Optional

MAX_CHARACTERS: Final[int] = 50
LIMIT_MESSAGE: Final[str] = "{} Characters Max".format(MAX_CHARACTERS)


@dataclass(frozen=True)
class InputDecision:
    """Outcome of an edit: the value to keep and an optional warning."""

    value: str
    accepted: bool
    warning: Optional[str] = None


def decide_input(previous: str, proposed: str, *, limit: int = MAX_CHARACTERS) -> InputDecision:
    """Accept `proposed` if it fits, otherwise keep `previous`.

    Length is counted in Unicode code points. A warning is only produced when
    the edit grows the text past the limit (typing), not when an already long
    value is being shortened.
    """
    previous = previous or ""
    proposed = proposed or ""
    if len(proposed) <= limit:
        return InputDecision(value=proposed, accepted=True)
    warning = LIMIT_MESSAGE if len(proposed) > len(previous) else None
    return InputDecision(value=previous, accepted=False, warning=warning)


def counter_text(text: str, *, limit: int = MAX_CHARACTERS) -> str:
    return "{} / {} Characters".format(len(text or ""), limit)
