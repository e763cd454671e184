from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from hanzi_sheet.domain.annotation_types import AnnotationResult
from hanzi_sheet.domain.generation import GenerationCounter
from hanzi_sheet.domain.hanzi_unicode import contains_qualifying
from hanzi_sheet.services.annotator import annotate
from hanzi_sheet.services.pronunciation_lookup import PronunciationLookup

logger = logging.getLogger(__name__)


class _TaskSignals(QObject):
    finished = pyqtSignal(int, object)  # generation, AnnotationResult


class _AnnotationTask(QRunnable):
    def __init__(self, generation: int, text: str, lookup: PronunciationLookup) -> None:
        super().__init__()
        self.generation = generation
        self.text = text
        self.lookup = lookup
        self.signals = _TaskSignals()

    def run(self) -> None:
        # annotate() never raises; lookup failures come back as empty readings.
        result = annotate(self.text, self.lookup)
        self.signals.finished.emit(self.generation, result)


class AnnotationController(QObject):
    """Runs pronunciation annotation off the UI thread.

    Every request is numbered; a result is committed only if no newer request
    was issued in the meantime. Results therefore may arrive in any order.
    """

    annotated = pyqtSignal(object)  # AnnotationResult
    loading_changed = pyqtSignal(bool)

    def __init__(
        self,
        lookup: PronunciationLookup,
        *,
        pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._lookup = lookup
        self._pool = pool or QThreadPool.globalInstance()
        self._generations = GenerationCounter()
        self._loading = False
        self._result = AnnotationResult()
        self._tasks: dict[int, _AnnotationTask] = {}

    @property
    def result(self) -> AnnotationResult:
        return self._result

    def is_loading(self) -> bool:
        return self._loading

    def request(self, text: str) -> int:
        generation = self._generations.issue()
        if not contains_qualifying(text):
            # Nothing to look up: commit synchronously.
            self._commit(generation, annotate(text, self._lookup))
            return generation

        task = _AnnotationTask(generation, text, self._lookup)
        task.signals.finished.connect(self._on_task_finished)
        self._tasks[generation] = task
        self._set_loading(True)
        self._pool.start(task)
        return generation

    def _on_task_finished(self, generation: int, result: object) -> None:
        self._tasks.pop(generation, None)
        self._commit(generation, result)

    def _commit(self, generation: int, result: object) -> bool:
        if not self._generations.is_current(generation):
            logger.debug("Dropping stale annotation result (generation %d)", generation)
            return False
        if not isinstance(result, AnnotationResult):
            logger.warning("Annotation produced %r; using empty result", type(result).__name__)
            result = AnnotationResult()
        self._result = result
        self._set_loading(False)
        self.annotated.emit(result)
        return True

    def _set_loading(self, loading: bool) -> None:
        if loading != self._loading:
            self._loading = loading
            self.loading_changed.emit(loading)
