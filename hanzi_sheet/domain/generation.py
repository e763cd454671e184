from __future__ import annotations


class GenerationCounter:
    """Monotonic request numbering for stale-result suppression.

    Each new request calls `issue()`; when its result arrives the caller asks
    `is_current(generation)` and drops the result if a newer request exists.
    """

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, generation: int) -> bool:
        return int(generation) == self._latest
