"""Cancellable one-second tick source backed by a daemon thread."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol


class TickerLike(Protocol):
    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...

    def is_current(self, generation: int) -> bool:
        ...


class RepeatingTicker:
    """Calls `callback(generation)` every `interval_seconds` until cancelled.

    Each `start()` opens a new generation with its own stop event. `cancel()`
    closes the generation without joining, so it is safe to call from inside
    the callback; ticks already in flight carry the old generation and
    callers drop them with `is_current()`.
    """

    def __init__(
        self,
        callback: Callable[[int], None],
        *,
        interval_seconds: float = 1.0,
        name: str = "session-ticker",
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._callback = callback
        self._interval_seconds = float(interval_seconds)
        self._name = name
        self._logger = logger or logging.getLogger("runtime.ticker")
        self._lock = threading.Lock()
        self._generation = 0
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return (
                generation == self._generation
                and self._stop_event is not None
                and not self._stop_event.is_set()
            )

    def start(self) -> None:
        with self._lock:
            if self._stop_event is not None:
                self._stop_event.set()
            self._generation += 1
            generation = self._generation
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run,
                args=(generation, stop_event),
                daemon=True,
                name=f"{self._name}-{generation}",
            )
            thread = self._thread
        thread.start()
        self._logger.debug("Ticker started: generation=%d", generation)

    def cancel(self) -> None:
        with self._lock:
            if self._stop_event is None:
                return
            self._stop_event.set()
            self._stop_event = None
            self._thread = None
            self._generation += 1
            generation = self._generation
        self._logger.debug("Ticker cancelled: next generation=%d", generation)

    def _run(self, generation: int, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_seconds):
            if not self.is_current(generation):
                return
            try:
                self._callback(generation)
            except Exception:
                self._logger.exception("Tick callback failed")
