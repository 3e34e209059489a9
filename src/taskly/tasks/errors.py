# src/taskly/tasks/errors.py

from __future__ import annotations


class StorageError(Exception):
    """Base class for storage slot failures."""


class StorageReadFailure(StorageError):
    """The slot exists but could not be read."""


class StorageWriteFailure(StorageError):
    """The slot could not be written (disk full, permissions, locked db...)."""


class CorruptDataError(ValueError):
    """Persisted blob could not be turned back into a valid task list."""


class HydrationWarning(UserWarning):
    """Persisted data was ignored at startup; the session continues with an empty list."""
