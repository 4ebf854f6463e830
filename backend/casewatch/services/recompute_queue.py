from __future__ import annotations

import queue
from threading import Condition, Event, Thread
from typing import Callable, List, Optional

from loguru import logger

from casewatch.domain.models import RecomputeResult

from .recompute import HotspotRecomputer

_STOP = object()


class RecomputeQueue:
    """Single worker that runs one recompute per submitted validation event.

    Keeps recomputation off the validation request path. Each ``submit`` is
    delivered to the recomputer exactly once by the worker thread; failed
    cycles are logged, not retried.
    """

    def __init__(
        self,
        recomputer: HotspotRecomputer,
        *,
        on_result: Optional[Callable[[RecomputeResult], None]] = None,
        keep_results: int = 50,
    ):
        self.recomputer = recomputer
        self.on_result = on_result
        self.keep_results = keep_results
        self.results: List[RecomputeResult] = []
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._stopped = Event()
        self._idle = Condition()
        self._outstanding = 0
        self._worker: Optional[Thread] = None

    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def start(self) -> "RecomputeQueue":
        if self.running:
            return self
        self._stopped.clear()
        self._worker = Thread(target=self._run, name="hotspot-recompute", daemon=True)
        self._worker.start()
        return self

    def submit(self, reason: str = "report validated") -> None:
        if self._stopped.is_set():
            raise RuntimeError("recompute queue is stopped")
        with self._idle:
            self._outstanding += 1
        self._queue.put(reason)

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self, timeout: Optional[float] = None) -> bool:
        """Block until every submitted event has been processed."""
        if not self.running:
            raise RuntimeError("recompute queue is not running")
        with self._idle:
            return self._idle.wait_for(lambda: self._outstanding == 0, timeout)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        if self._worker is None:
            return
        self._stopped.set()
        self._queue.put(_STOP)
        self._worker.join(timeout)
        if not self._worker.is_alive():
            self._worker = None

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                logger.debug("Running queued hotspot recompute ({})", item)
                result = self.recomputer.recompute()
                self._record(result)
            finally:
                self._queue.task_done()
                if item is not _STOP:
                    with self._idle:
                        self._outstanding -= 1
                        self._idle.notify_all()

    def _record(self, result: RecomputeResult) -> None:
        if not result.success:
            logger.error("Queued hotspot recompute failed: {}", result.message)
        self.results.append(result)
        if len(self.results) > self.keep_results:
            del self.results[: len(self.results) - self.keep_results]
        if self.on_result is not None:
            try:
                self.on_result(result)
            except Exception as exc:
                logger.warning("Recompute result callback failed: {!r}", exc)
