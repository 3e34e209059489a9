# src/taskly/tasks/storage.py

"""
Persistence adapters: one fixed key, one serialized blob.

Every adapter exposes `load() -> str | None` and `save(blob) -> None`.
They do not parse the blob; the store decides whether it is usable.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import sqlite3
import time
from pathlib import Path

from .errors import StorageReadFailure, StorageWriteFailure

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _key_to_filename(key: str) -> str:
    safe = _UNSAFE_KEY_CHARS.sub("_", key.strip()) or "default"
    return f"{safe}.json"


class JsonFileStorage:
    """
    File-backed slot: `<directory>/<key>.json`.

    Writes go through a temp file + os.replace so a crash never leaves
    a half-written blob behind.
    """

    def __init__(self, directory: str | Path, key: str) -> None:
        self.key = key
        self._dir = Path(directory)
        self._path = self._dir / _key_to_filename(key)

    @property
    def path(self) -> Path:
        return self._path

    def describe(self) -> str:
        return f"json:{self._path}"

    def load(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            return self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadFailure(f"Cannot read {self._path}: {e}") from e

    def save(self, blob: str) -> None:
        tmp = self._path.with_suffix(".tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(blob, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageWriteFailure(f"Cannot write {self._path}: {e}") from e

        with contextlib.suppress(OSError):
            # Best-effort: keep the file private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("Saved %d bytes to %s", len(blob), self._path)


class SqliteStorage:
    """
    SQLite-backed key/value slot.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path, key: str) -> None:
        self.key = key
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteStorage ready db=%s key=%s", self._db_path, key)

    def describe(self) -> str:
        return f"sqlite:{self._db_path}"

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def load(self) -> str | None:
        try:
            conn = self._get_conn()
            try:
                cur = conn.execute("SELECT value FROM kv WHERE key = ?", (self.key,))
                row = cur.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageReadFailure(f"Cannot read key {self.key!r} from {self._db_path}: {e}") from e
        return None if row is None else str(row[0])

    def save(self, blob: str) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                                   updated_at = excluded.updated_at
                    """,
                    (self.key, blob, time.time()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageWriteFailure(f"Cannot write key {self.key!r} to {self._db_path}: {e}") from e
        logger.debug("Saved %d bytes to %s key=%s", len(blob), self._db_path, self.key)


class MemoryStorage:
    """In-process slot (tests, throwaway sessions)."""

    def __init__(self, key: str, initial: str | None = None) -> None:
        self.key = key
        self.blob = initial
        self.saves = 0

    def describe(self) -> str:
        return "memory"

    def load(self) -> str | None:
        return self.blob

    def save(self, blob: str) -> None:
        self.blob = blob
        self.saves += 1
