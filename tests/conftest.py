"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from sportsbot.config import Settings
from sportsbot.services.cache import CacheManager
from sportsbot.services.db import Database
from sportsbot.services.query_log import QueryLog
from sportsbot.services.users import FavoritesStore, UserStore


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def db():
    database = Database(":memory:")
    database.open()
    yield database
    database.close()


@pytest.fixture
def cache(db, clock) -> CacheManager:
    return CacheManager(db, clock=clock)


@pytest.fixture
def users(db, clock) -> UserStore:
    return UserStore(db, clock=clock)


@pytest.fixture
def query_log(db, clock) -> QueryLog:
    return QueryLog(db, clock=clock)


@pytest.fixture
def favorites(db, clock) -> FavoritesStore:
    return FavoritesStore(db, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        football_api_key="test_key",
        basketball_api_key="test_key",
    )


@pytest.fixture
def standings_payload() -> dict:
    """football-data.org standings for a short Serie A table."""
    return {
        "competition": {"id": 2019, "name": "Serie A", "code": "SA"},
        "standings": [
            {
                "type": "TOTAL",
                "table": [
                    _standing_row(1, 108, "FC Internazionale Milano", points=60, gd=35),
                    _standing_row(2, 113, "SSC Napoli", points=55, gd=20),
                    _standing_row(18, 450, "Hellas Verona FC", points=20, gd=-25),
                ],
            }
        ],
    }


@pytest.fixture
def match_payload() -> dict:
    return {
        "id": 1001,
        "utcDate": "2026-03-01T19:45:00Z",
        "status": "FINISHED",
        "matchday": 27,
        "competition": {"name": "Serie A"},
        "homeTeam": {"id": 108, "name": "FC Internazionale Milano", "shortName": "Inter"},
        "awayTeam": {"id": 98, "name": "AC Milan", "shortName": "Milan"},
        "score": {"winner": "HOME_TEAM", "fullTime": {"home": 2, "away": 1}},
    }


@pytest.fixture
def player_payload() -> dict:
    """api-sports basketball player record."""
    return {
        "id": 265,
        "name": "LeBron James",
        "birth": {"date": "1984-12-30", "country": "USA"},
        "height": "2.06 m",
        "weight": 113,
        "team": {"id": 145, "name": "Los Angeles Lakers"},
        "leagues": [{"id": 12, "name": "NBA"}],
    }


@pytest.fixture
def game_payload() -> dict:
    return {
        "id": 4242,
        "date": "2026-03-01T01:30:00+00:00",
        "status": {"long": "Quarter 3", "short": "Q3"},
        "league": {"id": 12, "name": "NBA"},
        "teams": {
            "home": {"id": 145, "name": "Los Angeles Lakers"},
            "away": {"id": 133, "name": "Boston Celtics"},
        },
        "scores": {"home": {"total": 78}, "away": {"total": None}},
    }


def _standing_row(position: int, team_id: int, name: str, *, points: int, gd: int) -> dict:
    return {
        "position": position,
        "team": {"id": team_id, "name": name},
        "playedGames": 27,
        "won": points // 3,
        "draw": points % 3,
        "lost": 27 - points // 3 - points % 3,
        "points": points,
        "goalsFor": 40,
        "goalsAgainst": 40 - gd,
        "goalDifference": gd,
    }
