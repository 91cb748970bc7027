"""Dispatcher that applies UI commands to the focus app."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from contracts.ui_protocol import (
    COMMAND_ADD_TASK,
    COMMAND_DELETE_TASK,
    COMMAND_NAMES,
    COMMAND_SELECT_SESSION,
    COMMAND_SET_DARK_MODE,
    COMMAND_SKIP_SESSION,
    COMMAND_START_PAUSE,
    REASON_ACCEPTED,
    REASON_INVALID_ARGUMENTS,
    REASON_UNKNOWN_COMMAND,
)
from pomodoro.constants import SESSION_TYPES

from .app import FocusApp


@dataclass(frozen=True)
class CommandResult:
    """Outcome of applying a single UI command."""
    command: str
    accepted: bool
    reason: str
    detail: str = ""


class CommandDispatcher:
    """Routes `{"command": ...}` messages to FocusApp operations."""
    def __init__(self, app: FocusApp, logger: Optional[logging.Logger] = None):
        self._app = app
        self._logger = logger or logging.getLogger("runtime.commands")

    def dispatch(self, message: Mapping[str, Any]) -> CommandResult:
        raw_name = message.get("command") if isinstance(message, Mapping) else None
        if not isinstance(raw_name, str):
            return self._reject("", REASON_UNKNOWN_COMMAND, "missing command name")
        name = raw_name.strip()
        if name not in COMMAND_NAMES:
            return self._reject(name, REASON_UNKNOWN_COMMAND, f"unsupported command {name!r}")

        if name == COMMAND_START_PAUSE:
            self._app.start_pause()
            return self._accept(name)

        if name == COMMAND_SKIP_SESSION:
            self._app.skip_session()
            return self._accept(name)

        if name == COMMAND_SELECT_SESSION:
            session_type = message.get("session_type")
            if session_type not in SESSION_TYPES:
                return self._reject(name, REASON_INVALID_ARGUMENTS, "unknown session_type")
            self._app.select_session(session_type)
            return self._accept(name)

        if name == COMMAND_ADD_TASK:
            task_name = message.get("name")
            pomodoros = message.get("pomodoros_needed")
            if not isinstance(task_name, str):
                return self._reject(name, REASON_INVALID_ARGUMENTS, "name must be a string")
            if isinstance(pomodoros, bool) or not isinstance(pomodoros, int):
                return self._reject(
                    name,
                    REASON_INVALID_ARGUMENTS,
                    "pomodoros_needed must be an integer",
                )
            task = self._app.add_task(task_name, pomodoros)
            return self._accept(name, detail=task.id)

        if name == COMMAND_DELETE_TASK:
            task_id = message.get("task_id")
            if not isinstance(task_id, str):
                return self._reject(name, REASON_INVALID_ARGUMENTS, "task_id must be a string")
            self._app.delete_task(task_id)
            return self._accept(name)

        assert name == COMMAND_SET_DARK_MODE
        enabled = message.get("enabled")
        if not isinstance(enabled, bool):
            return self._reject(name, REASON_INVALID_ARGUMENTS, "enabled must be a boolean")
        self._app.set_dark_mode(enabled)
        return self._accept(name)

    def _accept(self, name: str, *, detail: str = "") -> CommandResult:
        self._logger.debug("UI command applied: %s", name)
        return CommandResult(command=name, accepted=True, reason=REASON_ACCEPTED, detail=detail)

    def _reject(self, name: str, reason: str, detail: str) -> CommandResult:
        self._logger.warning("UI command rejected: %s (%s: %s)", name or "<none>", reason, detail)
        return CommandResult(command=name, accepted=False, reason=reason, detail=detail)
