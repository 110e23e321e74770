# storage/kv_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class SqliteKeyValueStore:
    """
    SQLite-backed key-value slots.

    One row per key; the value is an opaque string written over on every set.

    Thread-safety:
    - each call opens its own SQLite connection
    - the blocking work runs in a worker thread (asyncio.to_thread), so the
      event loop keeps serving input while a write is in flight
    """

    def __init__(self, db_path: str | Path = "storage.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteKeyValueStore ready db=%s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

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

    def _get_item_sync(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row[0])
        finally:
            conn.close()

    def _set_item_sync(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, time.time()),
            )
            conn.commit()
            logger.debug("kv set key=%s bytes=%d", key, len(value))
        finally:
            conn.close()

    # ---- public API ----

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get_item_sync, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set_item_sync, key, value)
