"""Durable storage of the daily counter, settings, and task list."""

from .errors import PersistenceError, StorageReadError, StorageWriteError
from .gateway import (
    KEY_DAILY_COUNT,
    KEY_DARK_MODE,
    KEY_LAST_RESET_DATE,
    KEY_TASKS,
    PersistenceGateway,
    decode_tasks,
    encode_tasks,
)
from .store import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from .writer import BackgroundWriter

__all__ = [
    "BackgroundWriter",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KEY_DAILY_COUNT",
    "KEY_DARK_MODE",
    "KEY_LAST_RESET_DATE",
    "KEY_TASKS",
    "KeyValueStore",
    "PersistenceError",
    "PersistenceGateway",
    "StorageReadError",
    "StorageWriteError",
    "decode_tasks",
    "encode_tasks",
]
