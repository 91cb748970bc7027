"""In-memory pomodoro session state machine driven by one-second ticks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from .constants import (
    ACTION_ADVANCE,
    ACTION_PAUSE,
    ACTION_SELECT,
    ACTION_SKIP,
    ACTION_START,
    ACTION_TICK,
    DEFAULT_FOCUS_SECONDS,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_POMODOROS_PER_CYCLE,
    DEFAULT_SHORT_BREAK_SECONDS,
    SESSION_FOCUS,
    SESSION_LONG_BREAK,
    SESSION_SHORT_BREAK,
    SESSION_TYPES,
)
from .contracts import DailyCountSinkLike, NotificationSchedulerLike, TickSchedulerLike
from .messages import format_duration, notification_text, session_label

SessionType = Literal["focus", "short_break", "long_break"]


@dataclass(frozen=True)
class SessionDurations:
    """Configured length of each session type plus the long-break cadence."""
    focus_seconds: int = DEFAULT_FOCUS_SECONDS
    short_break_seconds: int = DEFAULT_SHORT_BREAK_SECONDS
    long_break_seconds: int = DEFAULT_LONG_BREAK_SECONDS
    pomodoros_per_cycle: int = DEFAULT_POMODOROS_PER_CYCLE

    def __post_init__(self) -> None:
        for name in ("focus_seconds", "short_break_seconds", "long_break_seconds"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be greater than zero")
        if int(self.pomodoros_per_cycle) < 1:
            raise ValueError("pomodoros_per_cycle must be at least 1")

    def seconds_for(self, session_type: str) -> int:
        if session_type == SESSION_FOCUS:
            return int(self.focus_seconds)
        if session_type == SESSION_SHORT_BREAK:
            return int(self.short_break_seconds)
        if session_type == SESSION_LONG_BREAK:
            return int(self.long_break_seconds)
        raise ValueError(f"Unknown session type: {session_type!r}")

    @classmethod
    def from_settings(cls, settings) -> "SessionDurations":
        return cls(
            focus_seconds=int(settings.focus_seconds),
            short_break_seconds=int(settings.short_break_seconds),
            long_break_seconds=int(settings.long_break_seconds),
            pomodoros_per_cycle=int(settings.pomodoros_per_cycle),
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable session state exposed to the runtime and render sinks."""
    session_type: SessionType
    remaining_seconds: int
    active: bool
    cycle_count: int
    daily_count: int

    @property
    def formatted_time(self) -> str:
        return format_duration(self.remaining_seconds)

    @property
    def label(self) -> str:
        return session_label(self.session_type)


class SessionEngine:
    """Focus/short-break/long-break state machine with cycle and daily counting.

    The engine never measures time itself. A tick source started on
    `start_pause()` calls `tick()` once per elapsed second, and every state
    change is reported through the explicit `on_change` hook.
    """

    def __init__(
        self,
        *,
        durations: Optional[SessionDurations] = None,
        daily_count: int = 0,
        ticker: Optional[TickSchedulerLike] = None,
        notifier: Optional[NotificationSchedulerLike] = None,
        persistence: Optional[DailyCountSinkLike] = None,
        on_change: Optional[Callable[[SessionSnapshot], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._durations = durations or SessionDurations()
        self._ticker = ticker
        self._notifier = notifier
        self._persistence = persistence
        self._on_change = on_change
        self._logger = logger or logging.getLogger("pomodoro")

        self._session_type: SessionType = SESSION_FOCUS
        self._remaining_seconds = self._durations.seconds_for(SESSION_FOCUS)
        self._active = False
        self._cycle_count = 0
        self._daily_count = max(0, int(daily_count))

    @property
    def durations(self) -> SessionDurations:
        return self._durations

    @property
    def session_type(self) -> SessionType:
        return self._session_type

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def active(self) -> bool:
        return self._active

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def daily_count(self) -> int:
        return self._daily_count

    @property
    def formatted_time(self) -> str:
        return format_duration(self._remaining_seconds)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_type=self._session_type,
            remaining_seconds=self._remaining_seconds,
            active=self._active,
            cycle_count=self._cycle_count,
            daily_count=self._daily_count,
        )

    def upcoming_session_type(self) -> SessionType:
        """Return the session `advance_session()` would enter from here."""
        if self._session_type != SESSION_FOCUS:
            return SESSION_FOCUS
        if self._cycle_count + 1 >= self._durations.pomodoros_per_cycle:
            return SESSION_LONG_BREAK
        return SESSION_SHORT_BREAK

    # ----- Public operations -----
    def start_pause(self) -> SessionSnapshot:
        if self._active:
            self._halt()
            self._logger.info(
                "Session paused: type=%s remaining=%ss",
                self._session_type,
                self._remaining_seconds,
            )
            return self._emit(ACTION_PAUSE)

        if self._remaining_seconds == 0:
            # Started during the completion second: finish the transition
            # here. The finished session's alert is due now and stays.
            self._advance()

        self._active = True
        if self._ticker is not None:
            # A restart must never leave a second tick source running.
            self._ticker.cancel()
            self._ticker.start()
        self._schedule_notification()
        self._logger.info(
            "Session started: type=%s remaining=%ss",
            self._session_type,
            self._remaining_seconds,
        )
        return self._emit(ACTION_START)

    def tick(self) -> SessionSnapshot:
        if self._remaining_seconds > 0:
            if not self._active:
                self._logger.debug("Ignoring tick while paused")
                return self.snapshot()
            self._remaining_seconds -= 1
            if self._remaining_seconds == 0:
                # The ticker keeps running for the completion tick; the
                # pending notification is due now and stays scheduled.
                self._active = False
                self._logger.info("Session countdown reached zero: type=%s", self._session_type)
            return self._emit(ACTION_TICK)

        self._advance()
        self._active = False
        if self._ticker is not None:
            self._ticker.cancel()
        return self._emit(ACTION_ADVANCE)

    def advance_session(self) -> SessionSnapshot:
        self._advance()
        return self._emit(ACTION_ADVANCE)

    def select_session(self, session_type: str) -> SessionSnapshot:
        if session_type not in SESSION_TYPES:
            raise ValueError(f"Unknown session type: {session_type!r}")

        self._halt()
        self._session_type = session_type  # type: ignore[assignment]
        self._remaining_seconds = self._durations.seconds_for(session_type)
        self._logger.info("Session selected: type=%s", session_type)
        return self._emit(ACTION_SELECT)

    def skip_session(self) -> SessionSnapshot:
        self._halt()
        previous = self._session_type
        self._advance()
        self._logger.info("Session skipped: %s -> %s", previous, self._session_type)
        return self._emit(ACTION_SKIP)

    def halt(self) -> None:
        """Stop the tick source and pending alerts without emitting a change."""
        self._halt()

    # ----- Internals -----
    def _advance(self) -> None:
        previous = self._session_type
        if previous == SESSION_FOCUS:
            self._daily_count += 1
            self._cycle_count += 1
            if self._persistence is not None:
                self._persistence.save_daily_count(self._daily_count)
            if self._cycle_count >= self._durations.pomodoros_per_cycle:
                self._session_type = SESSION_LONG_BREAK
                self._cycle_count = 0
            else:
                self._session_type = SESSION_SHORT_BREAK
        else:
            self._session_type = SESSION_FOCUS

        self._remaining_seconds = self._durations.seconds_for(self._session_type)
        self._logger.info(
            "Session advanced: %s -> %s (cycle=%d, daily=%d)",
            previous,
            self._session_type,
            self._cycle_count,
            self._daily_count,
        )

    def _halt(self) -> None:
        self._active = False
        if self._ticker is not None:
            self._ticker.cancel()
        self._cancel_notifications()

    def _schedule_notification(self) -> None:
        if self._notifier is None:
            return
        title, body = notification_text(self.upcoming_session_type())
        try:
            self._notifier.schedule(self._remaining_seconds, title, body)
        except Exception as error:
            self._logger.warning("Notification scheduling failed: %s", error)

    def _cancel_notifications(self) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.cancel_all()
        except Exception as error:
            self._logger.warning("Notification cancellation failed: %s", error)

    def _emit(self, action: str) -> SessionSnapshot:
        snapshot = self.snapshot()
        self._logger.debug(
            "Session %s: type=%s remaining=%s active=%s",
            action,
            snapshot.session_type,
            snapshot.formatted_time,
            snapshot.active,
        )
        if self._on_change is not None:
            self._on_change(snapshot)
        return snapshot
