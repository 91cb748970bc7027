"""Display and notification text builders for session state."""

from __future__ import annotations

from .constants import (
    SESSION_FOCUS,
    SESSION_LABELS,
    SESSION_LONG_BREAK,
    SESSION_SHORT_BREAK,
)


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def session_label(session_type: str) -> str:
    return SESSION_LABELS.get(session_type, session_type)


def notification_text(entering: str) -> tuple[str, str]:
    """Return `(title, body)` for the alert fired when `entering` begins."""
    if entering == SESSION_SHORT_BREAK:
        return "Focus session complete", "Nice work! Time for a short break."
    if entering == SESSION_LONG_BREAK:
        return "Focus session complete", "Cycle finished. Enjoy a long break."
    if entering == SESSION_FOCUS:
        return "Break is over", "Time to focus."
    return "Session complete", f"{session_label(entering)} is up next."
