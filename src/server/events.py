"""Wire format of UI websocket frames and the replay cache for new clients."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from contracts.ui_protocol import REPLAYED_EVENT_TYPES


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Encode one server-to-client frame as JSON text.

    Every frame carries `type` and a UTC `timestamp`; payload keys sit next
    to them at the top level.
    """
    frame: dict[str, Any] = {
        "type": event_type,
        "timestamp": (now_fn or _utc_now)().isoformat(),
    }
    frame.update(payload)
    return json.dumps(frame)


def parse_command(raw: str | bytes) -> dict[str, Any]:
    """Decode a client command frame, raising ValueError when malformed."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    message = json.loads(raw)
    if not isinstance(message, dict):
        raise ValueError("Command frame must be a JSON object.")
    return message


class ReplayCache:
    """Latest frame of each replayed event type, sent to clients on connect.

    Only render frames are replayed by default: a late joiner needs the
    current timer face, while error replies belong to the client whose
    command caused them.
    """

    def __init__(self, event_types: Iterable[str] = REPLAYED_EVENT_TYPES):
        self._event_types = tuple(event_types)
        self._frames: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, frame: str) -> bool:
        if event_type not in self._event_types:
            return False
        with self._lock:
            self._frames[event_type] = frame
        return True

    def frames(self) -> list[str]:
        with self._lock:
            return [self._frames[kind] for kind in self._event_types if kind in self._frames]
