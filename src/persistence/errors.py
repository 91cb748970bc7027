class PersistenceError(Exception):
    """Base exception for durable key-value storage."""


class StorageReadError(PersistenceError):
    """Raised when the backing store cannot be read."""


class StorageWriteError(PersistenceError):
    """Raised when the backing store cannot be written."""
