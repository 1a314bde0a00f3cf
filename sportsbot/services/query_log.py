"""Append-only log of user queries and the aggregations built on it."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime

from pydantic import BaseModel

from sportsbot.services.db import Clock, Database, from_db_time, to_db_time, utcnow

log = logging.getLogger(__name__)


class QueryLogEntry(BaseModel):
    user_id: int
    query_type: str
    parameter: str | None = None
    timestamp: datetime

    def describe(self) -> str:
        when = self.timestamp.strftime("%d/%m %H:%M")
        if self.parameter:
            return f"{self.query_type} - {self.parameter} ({when})"
        return f"{self.query_type} ({when})"


class QueryLog:
    """Records one entry per user-initiated query. Never raises."""

    def __init__(self, db: Database, clock: Clock = utcnow) -> None:
        self.db = db
        self._clock = clock

    def log(self, user_id: int, query_type: str, parameter: str | None = None) -> None:
        try:
            self.db.execute(
                "INSERT INTO query_log (user_id, query_type, parameter, timestamp) "
                "VALUES (?, ?, ?, ?)",
                (user_id, query_type, parameter, to_db_time(self._clock())),
            )
        except sqlite3.Error:
            log.exception("Failed to log %s query for user %s", query_type, user_id)

    def recent(self, user_id: int, limit: int = 5) -> list[QueryLogEntry]:
        """Newest entries first, at most limit of them."""
        if limit <= 0:
            return []
        try:
            rows = self.db.query(
                """
                SELECT user_id, query_type, parameter, timestamp
                FROM query_log
                WHERE user_id = ?
                ORDER BY timestamp DESC, id DESC
                LIMIT ?
                """,
                (user_id, limit),
            )
        except sqlite3.Error:
            log.exception("Failed to read query history for user %s", user_id)
            return []
        return [
            QueryLogEntry(
                user_id=r["user_id"],
                query_type=r["query_type"],
                parameter=r["parameter"],
                timestamp=from_db_time(r["timestamp"]),
            )
            for r in rows
        ]

    def most_frequent_category(self, user_id: int) -> str | None:
        """Most common non-null parameter for the user.

        Ties are resolved by SQLite's grouping order and are not stable.
        """
        try:
            row = self.db.query_one(
                """
                SELECT parameter, COUNT(*) AS hits
                FROM query_log
                WHERE user_id = ? AND parameter IS NOT NULL
                GROUP BY parameter
                ORDER BY hits DESC
                LIMIT 1
                """,
                (user_id,),
            )
        except sqlite3.Error:
            log.exception("Failed to aggregate queries for user %s", user_id)
            return None
        return row["parameter"] if row else None

    def count_for_user(self, user_id: int) -> int:
        try:
            row = self.db.query_one(
                "SELECT COUNT(*) AS n FROM query_log WHERE user_id = ?", (user_id,)
            )
        except sqlite3.Error:
            log.exception("Failed to count queries for user %s", user_id)
            return 0
        return row["n"] if row else 0

    def total_queries(self) -> int:
        try:
            row = self.db.query_one("SELECT COUNT(*) AS n FROM query_log")
        except sqlite3.Error:
            log.exception("Failed to count queries")
            return 0
        return row["n"] if row else 0

    def top_parameters(self, limit: int = 10) -> list[tuple[str, int]]:
        """Most queried parameters across all users."""
        try:
            rows = self.db.query(
                """
                SELECT parameter, COUNT(*) AS hits
                FROM query_log
                WHERE parameter IS NOT NULL
                GROUP BY parameter
                ORDER BY hits DESC
                LIMIT ?
                """,
                (limit,),
            )
        except sqlite3.Error:
            log.exception("Failed to aggregate top queries")
            return []
        return [(r["parameter"], r["hits"]) for r in rows]
