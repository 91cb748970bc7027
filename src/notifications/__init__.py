"""Local notification schedulers for session-end alerts."""

from .scheduler import (
    DesktopNotificationScheduler,
    NotificationError,
    NotificationHandle,
    NullNotificationScheduler,
)

__all__ = [
    "DesktopNotificationScheduler",
    "NotificationError",
    "NotificationHandle",
    "NullNotificationScheduler",
]
