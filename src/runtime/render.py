"""Render-state model and the observer list that pushes it to sinks."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pomodoro import SessionSnapshot
from tasks import Task

RenderSink = Callable[["RenderState"], None]


@dataclass(frozen=True)
class RenderState:
    """Everything the presentation layer needs to draw one frame."""
    session_type: str
    session_label: str
    formatted_time: str
    active: bool
    daily_count: int
    dark_mode_enabled: bool
    tasks: tuple[Task, ...]

    @classmethod
    def from_parts(
        cls,
        snapshot: SessionSnapshot,
        *,
        dark_mode_enabled: bool,
        tasks: tuple[Task, ...],
    ) -> "RenderState":
        return cls(
            session_type=snapshot.session_type,
            session_label=snapshot.label,
            formatted_time=snapshot.formatted_time,
            active=snapshot.active,
            daily_count=snapshot.daily_count,
            dark_mode_enabled=dark_mode_enabled,
            tasks=tasks,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "session_type": self.session_type,
            "session_label": self.session_label,
            "formatted_time": self.formatted_time,
            "active": self.active,
            "daily_count": self.daily_count,
            "dark_mode_enabled": self.dark_mode_enabled,
            "tasks": [task.to_record() for task in self.tasks],
        }


class RenderPublisher:
    """Push-based fan-out of render states to registered sinks."""
    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("runtime.render")
        self._sinks: list[RenderSink] = []
        self._lock = threading.Lock()

    def subscribe(self, sink: RenderSink) -> Callable[[], None]:
        with self._lock:
            self._sinks.append(sink)

        def unsubscribe() -> None:
            with self._lock:
                if sink in self._sinks:
                    self._sinks.remove(sink)

        return unsubscribe

    def publish(self, state: RenderState) -> None:
        with self._lock:
            sinks = tuple(self._sinks)
        for sink in sinks:
            try:
                sink(state)
            except Exception as error:
                self._logger.error("Render sink failed: %s", error, exc_info=True)
