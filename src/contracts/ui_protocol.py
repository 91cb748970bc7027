"""Web UI websocket event and command constants."""

from __future__ import annotations

# Server -> client event types
EVENT_HELLO = "hello"
EVENT_RENDER = "render"
EVENT_ERROR = "error"

# Events replayed to a client when it connects, in send order
REPLAYED_EVENT_TYPES: tuple[str, ...] = (EVENT_RENDER,)

# Client -> server commands
COMMAND_START_PAUSE = "start_pause"
COMMAND_SKIP_SESSION = "skip_session"
COMMAND_SELECT_SESSION = "select_session"
COMMAND_ADD_TASK = "add_task"
COMMAND_DELETE_TASK = "delete_task"
COMMAND_SET_DARK_MODE = "set_dark_mode"

COMMAND_NAMES: frozenset[str] = frozenset(
    {
        COMMAND_START_PAUSE,
        COMMAND_SKIP_SESSION,
        COMMAND_SELECT_SESSION,
        COMMAND_ADD_TASK,
        COMMAND_DELETE_TASK,
        COMMAND_SET_DARK_MODE,
    }
)

REASON_ACCEPTED = "accepted"
REASON_UNKNOWN_COMMAND = "unknown_command"
REASON_INVALID_ARGUMENTS = "invalid_arguments"
