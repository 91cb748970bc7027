"""Fire-and-forget executor for persistence writes."""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from typing import Callable, Optional


class BackgroundWriter:
    """Runs write jobs in submission order on a single worker thread."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("persistence")
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="persistence-writer",
        )
        self._pending: set[concurrent.futures.Future[None]] = set()
        self._lock = threading.Lock()
        self._closed = False

    def submit(self, job: Callable[[], None], *, description: str = "write") -> None:
        with self._lock:
            if self._closed:
                self._logger.warning("Dropping %s: writer is shut down", description)
                return
            future = self._executor.submit(job)
            self._pending.add(future)

        def _done(done: concurrent.futures.Future[None]) -> None:
            with self._lock:
                self._pending.discard(done)
            error = done.exception()
            if error is not None:
                self._logger.error("Persistence %s failed: %s", description, error)

        future.add_done_callback(_done)

    def flush(self, timeout_seconds: Optional[float] = None) -> None:
        """Block until every job submitted so far has finished."""
        with self._lock:
            pending = tuple(self._pending)
        if pending:
            concurrent.futures.wait(pending, timeout=timeout_seconds)

    def shutdown(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
