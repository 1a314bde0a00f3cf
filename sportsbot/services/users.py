"""Per-user identity, preferences and favorites."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from sportsbot.services.db import Clock, Database, from_db_time, to_db_time, utcnow

log = logging.getLogger(__name__)


class PreferenceField(str, Enum):
    """Columns of the users table that may be read or written individually."""

    PREFERRED_CATEGORY = "preferred_category"
    FAVORITE_ENTITY = "favorite_entity_name"
    NOTIFICATIONS = "notifications_enabled"


class UserProfile(BaseModel):
    user_id: int
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    preferred_category: str | None = None
    favorite_entity_name: str | None = None
    notifications_enabled: bool = False
    message_count: int = 0
    created_at: datetime
    last_activity: datetime


class FavoriteTeam(BaseModel):
    team_id: int
    team_name: str
    league: str | None = None


class FavoritePlayer(BaseModel):
    player_id: int
    player_name: str
    team: str | None = None


class UserStore:
    """Owns the users table. Registration is first-write-wins."""

    def __init__(self, db: Database, clock: Clock = utcnow) -> None:
        self.db = db
        self._clock = clock

    def register(
        self,
        user_id: int,
        username: str | None,
        first_name: str | None,
        last_name: str | None,
    ) -> bool:
        """Insert the user if unknown. Returns True when a row was created."""
        now = to_db_time(self._clock())
        try:
            created = self.db.execute(
                """
                INSERT OR IGNORE INTO users
                    (user_id, username, first_name, last_name, created_at, last_activity)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (user_id, username, first_name, last_name, now, now),
            )
        except sqlite3.Error:
            log.exception("Failed to register user %s", user_id)
            return False
        if created:
            log.info("Registered new user %s (%s)", user_id, username or first_name)
        return created > 0

    def touch_activity(self, user_id: int) -> None:
        """Refresh last activity and bump the message counter."""
        try:
            self.db.execute(
                "UPDATE users SET last_activity = ?, message_count = message_count + 1 "
                "WHERE user_id = ?",
                (to_db_time(self._clock()), user_id),
            )
        except sqlite3.Error:
            log.exception("Failed to update activity for user %s", user_id)

    def set_preference(
        self, user_id: int, field: PreferenceField, value: str | bool | None,
    ) -> None:
        try:
            field = PreferenceField(field)
        except ValueError:
            log.warning("Ignoring unknown preference %r for user %s", field, user_id)
            return
        if field is PreferenceField.NOTIFICATIONS:
            value = 1 if value else 0
        try:
            self.db.execute(
                f"UPDATE users SET {field.value} = ? WHERE user_id = ?",
                (value, user_id),
            )
        except sqlite3.Error:
            log.exception("Failed to set %s for user %s", field.value, user_id)

    def get_preference(self, user_id: int, field: PreferenceField) -> str | bool | None:
        try:
            field = PreferenceField(field)
        except ValueError:
            log.warning("Unknown preference %r requested for user %s", field, user_id)
            return None
        try:
            row = self.db.query_one(
                f"SELECT {field.value} AS value FROM users WHERE user_id = ?", (user_id,)
            )
        except sqlite3.Error:
            log.exception("Failed to read %s for user %s", field.value, user_id)
            row = None
        if field is PreferenceField.NOTIFICATIONS:
            return bool(row["value"]) if row else False
        return row["value"] if row else None

    def get_user(self, user_id: int) -> UserProfile | None:
        try:
            row = self.db.query_one("SELECT * FROM users WHERE user_id = ?", (user_id,))
        except sqlite3.Error:
            log.exception("Failed to load user %s", user_id)
            return None
        if row is None:
            return None
        data = dict(row)
        data["created_at"] = from_db_time(data["created_at"])
        data["last_activity"] = from_db_time(data["last_activity"])
        data["notifications_enabled"] = bool(data["notifications_enabled"])
        return UserProfile(**data)

    def total_users(self) -> int:
        try:
            row = self.db.query_one("SELECT COUNT(*) AS n FROM users")
        except sqlite3.Error:
            log.exception("Failed to count users")
            return 0
        return row["n"] if row else 0


class FavoritesStore:
    """Favorite teams and players, one row per (user, entity)."""

    def __init__(self, db: Database, clock: Clock = utcnow) -> None:
        self.db = db
        self._clock = clock

    # ── Teams ──

    def add_team(
        self, user_id: int, team_id: int, team_name: str, league: str | None = None,
    ) -> bool:
        try:
            added = self.db.execute(
                "INSERT OR IGNORE INTO favorite_teams "
                "(user_id, team_id, team_name, league, added_at) VALUES (?, ?, ?, ?, ?)",
                (user_id, team_id, team_name, league, to_db_time(self._clock())),
            )
        except sqlite3.Error:
            log.exception("Failed to add favorite team %s for user %s", team_id, user_id)
            return False
        return added > 0

    def remove_team(self, user_id: int, team_id: int) -> bool:
        try:
            removed = self.db.execute(
                "DELETE FROM favorite_teams WHERE user_id = ? AND team_id = ?",
                (user_id, team_id),
            )
        except sqlite3.Error:
            log.exception("Failed to remove favorite team %s for user %s", team_id, user_id)
            return False
        return removed > 0

    def teams(self, user_id: int) -> list[FavoriteTeam]:
        try:
            rows = self.db.query(
                "SELECT team_id, team_name, league FROM favorite_teams "
                "WHERE user_id = ? ORDER BY added_at DESC, id DESC",
                (user_id,),
            )
        except sqlite3.Error:
            log.exception("Failed to load favorite teams for user %s", user_id)
            return []
        return [FavoriteTeam(**dict(r)) for r in rows]

    # ── Players ──

    def add_player(
        self, user_id: int, player_id: int, player_name: str, team: str | None = None,
    ) -> bool:
        try:
            added = self.db.execute(
                "INSERT OR IGNORE INTO favorite_players "
                "(user_id, player_id, player_name, team, added_at) VALUES (?, ?, ?, ?, ?)",
                (user_id, player_id, player_name, team, to_db_time(self._clock())),
            )
        except sqlite3.Error:
            log.exception("Failed to add favorite player %s for user %s", player_id, user_id)
            return False
        return added > 0

    def remove_player(self, user_id: int, player_id: int) -> bool:
        try:
            removed = self.db.execute(
                "DELETE FROM favorite_players WHERE user_id = ? AND player_id = ?",
                (user_id, player_id),
            )
        except sqlite3.Error:
            log.exception("Failed to remove favorite player %s for user %s", player_id, user_id)
            return False
        return removed > 0

    def players(self, user_id: int) -> list[FavoritePlayer]:
        try:
            rows = self.db.query(
                "SELECT player_id, player_name, team FROM favorite_players "
                "WHERE user_id = ? ORDER BY added_at DESC, id DESC",
                (user_id,),
            )
        except sqlite3.Error:
            log.exception("Failed to load favorite players for user %s", user_id)
            return []
        return [FavoritePlayer(**dict(r)) for r in rows]
