"""Composition root that serializes every mutation of the pomodoro core."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from pomodoro import SessionDurations, SessionEngine, SessionSnapshot
from pomodoro.contracts import NotificationSchedulerLike
from notifications import NullNotificationScheduler
from persistence import PersistenceGateway
from tasks import Task, TaskStore

from .render import RenderPublisher, RenderSink, RenderState
from .ticker import RepeatingTicker, TickerLike

TickerFactory = Callable[[Callable[[int], None]], TickerLike]


def _default_ticker_factory(callback: Callable[[int], None]) -> TickerLike:
    return RepeatingTicker(callback)


class FocusApp:
    """Host-facing facade over the session engine, task store, and settings.

    UI commands and ticker callbacks arrive on different threads; a single
    re-entrant lock makes sure no two mutations interleave. Every change is
    saved through the gateway and pushed to render sinks.
    """

    def __init__(
        self,
        *,
        gateway: PersistenceGateway,
        durations: Optional[SessionDurations] = None,
        notifier: Optional[NotificationSchedulerLike] = None,
        ticker_factory: Optional[TickerFactory] = None,
        publisher: Optional[RenderPublisher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._lock = threading.RLock()
        self._gateway = gateway
        self._logger = logger or logging.getLogger("runtime.app")
        self._publisher = publisher or RenderPublisher()
        self._ticker = (ticker_factory or _default_ticker_factory)(self._on_tick)

        self._dark_mode_enabled = gateway.load_dark_mode()
        self._tasks = TaskStore(
            gateway.load_tasks(),
            on_change=self._on_tasks_changed,
        )
        self._engine = SessionEngine(
            durations=durations,
            daily_count=gateway.load_daily_count(),
            ticker=self._ticker,
            notifier=notifier or NullNotificationScheduler(),
            persistence=gateway,
            on_change=self._on_session_changed,
        )
        self._logger.info(
            "App ready: daily=%d tasks=%d dark_mode=%s",
            self._engine.daily_count,
            len(self._tasks),
            self._dark_mode_enabled,
        )

    # ----- Read side -----
    @property
    def engine(self) -> SessionEngine:
        return self._engine

    @property
    def dark_mode_enabled(self) -> bool:
        return self._dark_mode_enabled

    @property
    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return self._tasks.tasks

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._engine.snapshot()

    def render_state(self) -> RenderState:
        with self._lock:
            return self._render_state_locked()

    def subscribe(self, sink: RenderSink) -> Callable[[], None]:
        """Register a render sink and push the current state to it."""
        with self._lock:
            unsubscribe = self._publisher.subscribe(sink)
            sink(self._render_state_locked())
        return unsubscribe

    # ----- Session operations -----
    def start_pause(self) -> SessionSnapshot:
        with self._lock:
            return self._engine.start_pause()

    def tick(self) -> SessionSnapshot:
        with self._lock:
            return self._engine.tick()

    def skip_session(self) -> SessionSnapshot:
        with self._lock:
            return self._engine.skip_session()

    def select_session(self, session_type: str) -> SessionSnapshot:
        with self._lock:
            return self._engine.select_session(session_type)

    # ----- Task operations -----
    def add_task(self, name: str, pomodoros_needed: int) -> Task:
        with self._lock:
            return self._tasks.add_task(name, pomodoros_needed)

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            return self._tasks.delete_task(task_id)

    # ----- Settings -----
    def set_dark_mode(self, enabled: bool) -> None:
        with self._lock:
            enabled = bool(enabled)
            if enabled == self._dark_mode_enabled:
                return
            self._dark_mode_enabled = enabled
            self._gateway.save_dark_mode(enabled)
            self._logger.info("Dark mode %s", "enabled" if enabled else "disabled")
            self._publish_locked()

    def close(self) -> None:
        with self._lock:
            self._engine.halt()

    # ----- Internals -----
    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if not self._ticker.is_current(generation):
                self._logger.debug("Dropping stale tick: generation=%d", generation)
                return
            self._engine.tick()

    def _on_session_changed(self, snapshot: SessionSnapshot) -> None:
        del snapshot  # Render state is rebuilt from all owners.
        self._publish_locked()

    def _on_tasks_changed(self, tasks: tuple[Task, ...]) -> None:
        self._gateway.save_tasks(tasks)
        self._publish_locked()

    def _publish_locked(self) -> None:
        self._publisher.publish(self._render_state_locked())

    def _render_state_locked(self) -> RenderState:
        return RenderState.from_parts(
            self._engine.snapshot(),
            dark_mode_enabled=self._dark_mode_enabled,
            tasks=self._tasks.tasks,
        )
