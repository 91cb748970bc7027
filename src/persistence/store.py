"""Key-value stores backing the persistence gateway."""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol

from .errors import StorageReadError, StorageWriteError


class KeyValueStore(Protocol):
    """Durable string-keyed storage of JSON-compatible values."""
    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def set_many(self, values: Mapping[str, Any]) -> None:
        ...


class InMemoryKeyValueStore:
    """Thread-safe dictionary store used for tests and ephemeral runs."""
    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._values: dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value

    def set_many(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            self._values.update(values)

    def as_dict(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._values)


class JsonFileKeyValueStore:
    """Single JSON object on disk, rewritten atomically on every write."""

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger("persistence")
        self._lock = threading.Lock()
        self._values: Optional[dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Any:
        with self._lock:
            return self._load_locked().get(key)

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            updated = dict(self._load_locked())
            updated.update(values)
            self._write_locked(updated)
            self._values = updated

    def _load_locked(self) -> dict[str, Any]:
        if self._values is not None:
            return self._values

        try:
            self._values = self._read_file()
        except StorageReadError as error:
            self._logger.warning("Starting with empty store: %s", error)
            self._values = {}
        return self._values

    def _read_file(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as error:
            raise StorageReadError(f"Cannot read {self._path}: {error}") from error
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as error:
            raise StorageReadError(f"Corrupt store file {self._path}: {error}") from error
        if not isinstance(data, dict):
            raise StorageReadError(f"Store file {self._path} must hold a JSON object")
        return data

    def _write_locked(self, values: Mapping[str, Any]) -> None:
        temp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(
                json.dumps(values, indent=2, sort_keys=True),
                encoding="utf-8",
            )
            os.replace(temp_path, self._path)
        except (OSError, TypeError, ValueError) as error:
            raise StorageWriteError(f"Cannot write {self._path}: {error}") from error
