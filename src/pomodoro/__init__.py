from .engine import (
    SessionDurations,
    SessionEngine,
    SessionSnapshot,
    SessionType,
)
from .messages import format_duration, notification_text, session_label

__all__ = [
    "SessionDurations",
    "SessionEngine",
    "SessionSnapshot",
    "SessionType",
    "format_duration",
    "notification_text",
    "session_label",
]
