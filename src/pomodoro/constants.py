"""Session type, duration, and action constants used by the session engine."""

from __future__ import annotations

DEFAULT_FOCUS_SECONDS = 25 * 60
DEFAULT_SHORT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_POMODOROS_PER_CYCLE = 4

SESSION_FOCUS = "focus"
SESSION_SHORT_BREAK = "short_break"
SESSION_LONG_BREAK = "long_break"

SESSION_TYPES: tuple[str, ...] = (
    SESSION_FOCUS,
    SESSION_SHORT_BREAK,
    SESSION_LONG_BREAK,
)

SESSION_LABELS: dict[str, str] = {
    SESSION_FOCUS: "Pomodoro",
    SESSION_SHORT_BREAK: "Short Break",
    SESSION_LONG_BREAK: "Long Break",
}

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_TICK = "tick"
ACTION_ADVANCE = "advance"
ACTION_SELECT = "select"
ACTION_SKIP = "skip"
