"""SQLite-backed response cache with per-entry TTL."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timedelta

from pydantic import BaseModel

from sportsbot.services.db import Clock, Database, from_db_time, to_db_time, utcnow

log = logging.getLogger(__name__)


class CacheEntry(BaseModel):
    key: str
    payload: str
    category: str | None = None
    created_at: datetime
    expires_at: datetime


class CacheManager:
    """Key/value cache over the api_cache table.

    Reads never delete stale rows; only sweep_expired() and clear_all() do.
    Storage failures degrade to a miss (get) or to a no-op (writes).
    """

    def __init__(self, db: Database, clock: Clock = utcnow) -> None:
        self.db = db
        self._clock = clock

    def get(self, key: str) -> str | None:
        now = to_db_time(self._clock())
        try:
            row = self.db.query_one(
                "SELECT cache_data FROM api_cache WHERE cache_key = ? AND expires_at > ?",
                (key, now),
            )
        except sqlite3.Error:
            log.exception("Cache read failed for %s", key)
            return None
        if row is None:
            log.debug("Cache miss: %s", key)
            return None
        log.debug("Cache hit: %s", key)
        return row["cache_data"]

    def get_entry(self, key: str) -> CacheEntry | None:
        """Raw row for a key, expired or not."""
        try:
            row = self.db.query_one("SELECT * FROM api_cache WHERE cache_key = ?", (key,))
        except sqlite3.Error:
            log.exception("Cache read failed for %s", key)
            return None
        if row is None:
            return None
        return CacheEntry(
            key=row["cache_key"],
            payload=row["cache_data"],
            category=row["category"],
            created_at=from_db_time(row["created_at"]),
            expires_at=from_db_time(row["expires_at"]),
        )

    def put(self, key: str, payload: str, category: str | None, ttl_minutes: int) -> None:
        """Insert or fully replace the entry for key."""
        created = self._clock()
        try:
            expires = created + timedelta(minutes=ttl_minutes)
            self.db.execute(
                """
                INSERT INTO api_cache (cache_key, cache_data, category, created_at, expires_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(cache_key) DO UPDATE SET
                    cache_data = excluded.cache_data,
                    category = excluded.category,
                    created_at = excluded.created_at,
                    expires_at = excluded.expires_at
                """,
                (key, payload, category, to_db_time(created), to_db_time(expires)),
            )
        except (OverflowError, sqlite3.Error):
            log.exception("Cache write failed for %s", key)
            return
        log.debug("Cached %s for %d min", key, ttl_minutes)

    def sweep_expired(self) -> int:
        """Delete every entry whose expiry is at or before now."""
        now = to_db_time(self._clock())
        try:
            removed = self.db.execute("DELETE FROM api_cache WHERE expires_at <= ?", (now,))
        except sqlite3.Error:
            log.exception("Cache sweep failed")
            return 0
        if removed:
            log.info("Removed %d expired cache entries", removed)
        return removed

    def clear_all(self) -> None:
        try:
            removed = self.db.execute("DELETE FROM api_cache")
        except sqlite3.Error:
            log.exception("Cache clear failed")
            return
        log.info("Cleared %d cache entries", removed)
