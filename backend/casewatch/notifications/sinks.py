from __future__ import annotations

from threading import Lock
from typing import Callable, List

from loguru import logger

Listener = Callable[[], None]


class NullSink:
    def notify_hotspots_changed(self) -> None:
        return None


class LoggingSink:
    def notify_hotspots_changed(self) -> None:
        logger.info("hotspots changed")


class BroadcastSink:
    """Fan a "hotspots changed" signal out to in-process subscribers.

    Delivery is best effort: a failing listener is logged and the remaining
    listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = Lock()
        self.delivered = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def notify_hotspots_changed(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                logger.exception("hotspot listener {} failed", getattr(listener, "__name__", listener))
                continue
            self.delivered += 1
