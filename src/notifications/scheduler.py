"""One-shot local notification schedulers."""

from __future__ import annotations

import itertools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from plyer import notification


class NotificationError(Exception):
    """Raised when the desktop notification backend refuses an alert."""


@dataclass(frozen=True)
class NotificationHandle:
    """Opaque reference to a scheduled alert."""
    id: int
    fire_at_monotonic: float
    title: str
    body: str


_HANDLE_IDS = itertools.count(1)


def _new_handle(fire_after_seconds: float, title: str, body: str) -> NotificationHandle:
    return NotificationHandle(
        id=next(_HANDLE_IDS),
        fire_at_monotonic=time.monotonic() + max(0.0, float(fire_after_seconds)),
        title=title,
        body=body,
    )


class NullNotificationScheduler:
    """Scheduler used when notifications are disabled."""
    def schedule(self, fire_after_seconds: float, title: str, body: str) -> NotificationHandle:
        return _new_handle(fire_after_seconds, title, body)

    def cancel_all(self) -> None:
        return None


class DesktopNotificationScheduler:
    """Fires desktop alerts through plyer after a delay.

    Backend failures (no notification daemon, permission refused) are logged
    and otherwise ignored: the countdown keeps running without an OS alert.
    """

    def __init__(
        self,
        *,
        app_name: str = "Pomodoro Focus",
        timeout_seconds: int = 10,
        notify_fn: Optional[Callable[..., None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._app_name = app_name
        self._timeout_seconds = int(timeout_seconds)
        self._notify_fn = notify_fn or notification.notify
        self._logger = logger or logging.getLogger("notifications")
        self._timers: dict[int, threading.Timer] = {}
        self._lock = threading.Lock()

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._timers)

    def schedule(self, fire_after_seconds: float, title: str, body: str) -> NotificationHandle:
        handle = _new_handle(fire_after_seconds, title, body)
        timer = threading.Timer(
            max(0.0, float(fire_after_seconds)),
            self._fire,
            args=(handle,),
        )
        timer.daemon = True
        timer.name = f"notification-{handle.id}"
        with self._lock:
            self._timers[handle.id] = timer
        timer.start()
        self._logger.debug(
            "Notification scheduled in %.0fs: %s",
            fire_after_seconds,
            title,
        )
        return handle

    def cancel_all(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        if timers:
            self._logger.debug("Cancelled %d pending notification(s)", len(timers))

    def _fire(self, handle: NotificationHandle) -> None:
        with self._lock:
            if self._timers.pop(handle.id, None) is None:
                return
        try:
            self.deliver(handle.title, handle.body)
        except NotificationError as error:
            self._logger.warning("Notification not delivered: %s", error)

    def deliver(self, title: str, body: str) -> None:
        try:
            self._notify_fn(
                title=title,
                message=body,
                app_name=self._app_name,
                timeout=self._timeout_seconds,
            )
        except NotImplementedError as error:
            raise NotificationError("No desktop notification backend available") from error
        except Exception as error:
            raise NotificationError(str(error) or type(error).__name__) from error
        self._logger.info("Notification delivered: %s", title)
