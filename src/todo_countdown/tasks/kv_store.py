# src/todo_countdown/tasks/kv_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class SqliteKeyValueStore:
    """
    SQLite-backed string key/value store.

    One table, one row per key. Writes commit before returning, so a caller
    that persisted a value can rely on it being on disk.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "todo.sqlite3") -> None:
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
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
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

    # ---- public API ----

    def get(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cur.fetchone()
            if row is None:
                return None
            value = row["value"]
            return value if isinstance(value, str) else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
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
