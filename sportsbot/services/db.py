"""SQLite connection lifecycle and schema shared by all stores."""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Sequence

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Fixed-width UTC text so timestamps compare correctly as strings in SQL.
TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS api_cache (
        cache_key TEXT PRIMARY KEY,
        cache_data TEXT NOT NULL,
        category TEXT,
        created_at TEXT NOT NULL,
        expires_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_api_cache_expires ON api_cache (expires_at)",
    """
    CREATE TABLE IF NOT EXISTS users (
        user_id INTEGER PRIMARY KEY,
        username TEXT,
        first_name TEXT,
        last_name TEXT,
        preferred_category TEXT,
        favorite_entity_name TEXT,
        notifications_enabled INTEGER NOT NULL DEFAULT 0,
        message_count INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        last_activity TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS query_log (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        query_type TEXT NOT NULL,
        parameter TEXT,
        timestamp TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_query_log_user ON query_log (user_id, timestamp)",
    """
    CREATE TABLE IF NOT EXISTS favorite_teams (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        team_id INTEGER NOT NULL,
        team_name TEXT NOT NULL,
        league TEXT,
        added_at TEXT NOT NULL,
        UNIQUE(user_id, team_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS favorite_players (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        player_id INTEGER NOT NULL,
        player_name TEXT NOT NULL,
        team TEXT,
        added_at TEXT NOT NULL,
        UNIQUE(user_id, player_id)
    )
    """,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_db_time(dt: datetime) -> str:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(TIME_FORMAT)


def from_db_time(value: str) -> datetime:
    return datetime.strptime(value, TIME_FORMAT).replace(tzinfo=timezone.utc)


class Database:
    """One SQLite connection, opened and closed explicitly.

    Statements are serialized through a lock so handlers running on
    different threads never share the connection concurrently.
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = str(db_path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> None:
        """Connect and create tables. Errors propagate to the caller."""
        if self._conn is not None:
            return
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            with self._lock:
                for statement in SCHEMA:
                    conn.execute(statement)
                conn.commit()
        except sqlite3.Error:
            conn.close()
            raise
        self._conn = conn
        log.info("Database ready at %s", self.db_path)

    def close(self) -> None:
        if self._conn is None:
            return
        with self._lock:
            self._conn.close()
            self._conn = None
        log.info("Database connection closed")

    def __enter__(self) -> Database:
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("Database is not open")
        return self._conn

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement, commit, and return the affected row count."""
        with self._lock:
            conn = self._connection()
            try:
                cur = conn.execute(sql, params)
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
            return cur.rowcount

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self._connection().execute(sql, params).fetchall()

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Row | None:
        with self._lock:
            return self._connection().execute(sql, params).fetchone()
