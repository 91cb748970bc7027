"""Translation layer between in-memory app state and the key-value store."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from tasks import Task

from .errors import PersistenceError
from .store import KeyValueStore
from .writer import BackgroundWriter

KEY_DAILY_COUNT = "dailySessionsCompleted"
KEY_LAST_RESET_DATE = "lastResetDate"
KEY_DARK_MODE = "isDarkModeEnabled"
KEY_TASKS = "savedTasks"


class PersistenceGateway:
    """Stateless load/save of the daily counter, dark-mode flag, and tasks.

    Loads are synchronous. Saves go through the optional background writer
    and return before the write lands, so callers get no read-after-write
    guarantee. Without a writer, saves run inline.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        writer: Optional[BackgroundWriter] = None,
        now_fn: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._writer = writer
        self._now_fn = now_fn or datetime.now
        self._logger = logger or logging.getLogger("persistence")

    # ----- Daily count -----
    def load_daily_count(self) -> int:
        last_reset = self._store.get(KEY_LAST_RESET_DATE)
        if last_reset is not None:
            today = self._now_fn().date()
            last_day = _parse_day(last_reset)
            if last_day != today:
                self._logger.info(
                    "Resetting daily count: last reset %s, today %s",
                    last_reset,
                    today.isoformat(),
                )
                self._write_inline(self._daily_count_record(0), description="daily count reset")
                return 0

        raw = self._store.get(KEY_DAILY_COUNT)
        if raw is None:
            return 0
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            self._logger.warning("Ignoring malformed daily count: %r", raw)
            return 0
        return raw

    def save_daily_count(self, count: int) -> None:
        record = self._daily_count_record(int(count))
        self._dispatch(lambda: self._store.set_many(record), description="daily count save")

    # ----- Dark mode -----
    def load_dark_mode(self) -> bool:
        raw = self._store.get(KEY_DARK_MODE)
        if raw is None:
            return False
        if not isinstance(raw, bool):
            self._logger.warning("Ignoring malformed dark mode flag: %r", raw)
            return False
        return raw

    def save_dark_mode(self, enabled: bool) -> None:
        value = bool(enabled)
        self._dispatch(
            lambda: self._store.set(KEY_DARK_MODE, value),
            description="dark mode save",
        )

    # ----- Tasks -----
    def load_tasks(self) -> list[Task]:
        raw = self._store.get(KEY_TASKS)
        if raw is None:
            return []
        try:
            return decode_tasks(raw)
        except (TypeError, ValueError) as error:
            self._logger.warning("Discarding unreadable task list: %s", error)
            return []

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        blob = encode_tasks(tasks)
        self._dispatch(lambda: self._store.set(KEY_TASKS, blob), description="task save")

    # ----- Internals -----
    def _daily_count_record(self, count: int) -> dict[str, Any]:
        return {
            KEY_DAILY_COUNT: count,
            KEY_LAST_RESET_DATE: self._now_fn().isoformat(timespec="seconds"),
        }

    def _dispatch(self, job: Callable[[], None], *, description: str) -> None:
        if self._writer is None:
            self._run_logged(job, description)
            return
        self._writer.submit(job, description=description)

    def _write_inline(self, record: dict[str, Any], *, description: str) -> None:
        self._run_logged(lambda: self._store.set_many(record), description)

    def _run_logged(self, job: Callable[[], None], description: str) -> None:
        try:
            job()
        except PersistenceError as error:
            self._logger.error("Persistence %s failed: %s", description, error)


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task.to_record() for task in tasks])


def decode_tasks(blob: Any) -> list[Task]:
    """Decode a saved task blob, raising ValueError/TypeError when unusable."""
    if isinstance(blob, (bytes, bytearray)):
        blob = blob.decode("utf-8")
    records = json.loads(blob) if isinstance(blob, str) else blob
    if not isinstance(records, list):
        raise ValueError("Task blob must decode to a list.")
    return [Task.from_record(record) for record in records]


def _parse_day(raw: Any):
    if not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        return None
