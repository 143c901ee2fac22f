"""
Key-value store backends.

The collection services only need two asynchronous operations,
``get(key)`` and ``set(key, value)``, on string keys and string values.
Two backends are provided:

* ``MemoryKeyValueStore`` keeps values in a dictionary.  It is used by
  the tests and for throwaway sessions.
* ``SqliteKeyValueStore`` persists values in a single ``kv_store`` table
  so that data survives restarts.

Every backend failure surfaces as ``StorageError``; there are no
retries and no multi-key transactions.
"""

import asyncio
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from .config import Settings
from .errors import StorageError


logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface shared by all store backends."""

    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None`` if never set."""
        raise NotImplementedError

    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary backed store.

    With ``yield_on_io`` enabled every call gives control back to the
    event loop once before touching the data, the way a real I/O bound
    backend would.  Tests use it to interleave concurrent services.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None, yield_on_io: bool = False) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._yield_on_io = yield_on_io

    async def get(self, key: str) -> Optional[str]:
        if self._yield_on_io:
            await asyncio.sleep(0)
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError(f"Values must be strings, got {type(value).__name__} for {key!r}")
        if self._yield_on_io:
            await asyncio.sleep(0)
        self._data[key] = value

    def keys(self) -> list:
        return list(self._data)


class SqliteKeyValueStore(KeyValueStore):
    """Store backed by a SQLite file.

    The table is created lazily on first access.  Each call opens its
    own connection and keeps it only for the duration of the
    call; the file is the only shared state.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._initialised = False

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        conn = sqlite3.connect(self.path)
        try:
            cursor = conn.cursor()
            if not self._initialised:
                cursor.execute(
                    "CREATE TABLE IF NOT EXISTS kv_store ("
                    "key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
                self._initialised = True
            yield cursor
            conn.commit()
        finally:
            conn.close()

    async def get(self, key: str) -> Optional[str]:
        try:
            with self._cursor() as cursor:
                row = cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            logger.error("Reading %s from %s failed: %s", key, self.path, e)
            raise StorageError(f"Cannot read {key!r}: {e}") from e
        logger.debug("Read %s (%s)", key, "hit" if row else "miss")
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError(f"Values must be strings, got {type(value).__name__} for {key!r}")
        try:
            with self._cursor() as cursor:
                cursor.execute(
                    "INSERT INTO kv_store (key, value) VALUES (?, ?)"
                    " ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
        except sqlite3.Error as e:
            logger.error("Writing %s to %s failed: %s", key, self.path, e)
            raise StorageError(f"Cannot write {key!r}: {e}") from e


def get_database_path(settings: Settings) -> str:
    """Compute the path to the SQLite file.

    Absolute paths are used as is; relative ones are resolved against
    the project root (the directory containing the package).
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def create_store(settings: Settings) -> KeyValueStore:
    """Instantiate the backend selected by ``settings.storage_backend``."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "sqlite":
        return SqliteKeyValueStore(get_database_path(settings))
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
