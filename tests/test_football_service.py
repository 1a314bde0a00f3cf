"""Tests for FootballService with patched fetch functions."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from sportsbot.api.models import MatchList, PersonList, ScorerList, Standings, Team
from sportsbot.services.football import (
    FootballService,
    format_head_to_head,
    format_standings,
    format_today,
    format_top_scorers,
    position_marker,
)


@pytest.fixture
def service(settings, cache):
    return FootballService(settings=settings, cache=cache, client=AsyncMock())


async def test_standings_cached_after_first_fetch(service, cache, standings_payload):
    with patch(
        "sportsbot.services.football.get_standings", new_callable=AsyncMock
    ) as mock_standings:
        mock_standings.return_value = Standings(**standings_payload)

        first = await service.standings("SA")
        second = await service.standings("SA")

    assert mock_standings.await_count == 1
    assert first == second
    assert "Serie A" in first
    assert cache.get("standings_SA") == first
    entry = cache.get_entry("standings_SA")
    assert entry.category == "SA"
    assert (entry.expires_at - entry.created_at).total_seconds() == 30 * 60


async def test_standings_refetched_after_expiry(service, clock, standings_payload):
    with patch(
        "sportsbot.services.football.get_standings", new_callable=AsyncMock
    ) as mock_standings:
        mock_standings.return_value = Standings(**standings_payload)
        await service.standings("SA")
        clock.advance(minutes=31)
        await service.standings("SA")

    assert mock_standings.await_count == 2


async def test_upstream_error_returns_static_text_and_is_not_cached(service, cache):
    with patch(
        "sportsbot.services.football.get_matches", new_callable=AsyncMock
    ) as mock_matches:
        mock_matches.side_effect = httpx.ConnectError("boom")
        text = await service.matches("PL")

    assert text.startswith("❌")
    assert cache.get("matches_PL") is None


async def test_empty_result_is_not_cached(service, cache):
    with patch(
        "sportsbot.services.football.get_top_scorers", new_callable=AsyncMock
    ) as mock_scorers:
        mock_scorers.return_value = ScorerList()
        text = await service.top_scorers("CL")

    assert "not available" in text
    assert cache.get("topscorers_CL") is None


async def test_team_info_uses_team_ttl(service, cache):
    team = Team(
        id=108,
        name="FC Internazionale Milano",
        shortName="Inter",
        founded=1908,
        squad=[
            {"name": "Yann Sommer", "position": "Goalkeeper"},
            {"name": "Alessandro Bastoni", "position": "Defence"},
            {"name": "Nicolò Barella", "position": "Midfield"},
            {"name": "Lautaro Martínez", "position": "Offence"},
            {"name": "Unknown", "position": None},
        ],
    )
    with patch("sportsbot.services.football.get_team", new_callable=AsyncMock) as mock_team:
        mock_team.return_value = team
        text = await service.team_info(108)

    assert "Founded: 1908" in text
    assert "Venue: -" in text
    assert "SQUAD (5 players)" in text
    assert "Goalkeepers: 1" in text
    entry = cache.get_entry("team_108")
    assert entry.category is None
    assert (entry.expires_at - entry.created_at).total_seconds() == 120 * 60


async def test_today_matches_cached_for_five_minutes(service, cache, match_payload):
    with patch(
        "sportsbot.services.football.get_today_matches", new_callable=AsyncMock
    ) as mock_today:
        mock_today.return_value = MatchList(matches=[match_payload])
        text = await service.today_matches()

    assert "Inter vs Milan (2-1)" in text
    entry = cache.get_entry("matches_today")
    assert (entry.expires_at - entry.created_at).total_seconds() == 5 * 60


async def test_head_to_head_cached_for_a_day(service, cache, match_payload):
    with patch(
        "sportsbot.services.football.get_team_matches", new_callable=AsyncMock
    ) as mock_matches:
        mock_matches.return_value = MatchList(matches=[match_payload])
        text = await service.head_to_head(108, 98)

    assert "Team 1 wins: 1" in text
    entry = cache.get_entry("h2h_108_98")
    assert (entry.expires_at - entry.created_at).total_seconds() == 1440 * 60


async def test_search_player_is_not_cached(service, db):
    with patch(
        "sportsbot.services.football.search_persons", new_callable=AsyncMock
    ) as mock_search:
        mock_search.return_value = PersonList(
            persons=[{"name": "Lautaro Martínez", "nationality": "Argentina"}]
        )
        text = await service.search_player("Lautaro")

    assert "1. Lautaro Martínez" in text
    assert "Nationality: Argentina" in text
    assert "Born: -" in text
    assert db.query_one("SELECT COUNT(*) AS n FROM api_cache")["n"] == 0


async def test_search_player_no_results(service):
    with patch(
        "sportsbot.services.football.search_persons", new_callable=AsyncMock
    ) as mock_search:
        mock_search.return_value = PersonList()
        text = await service.search_player("Nobody")
    assert text == "❌ No player found named: Nobody"


class TestFormatting:
    def test_position_markers(self):
        assert position_marker(1) == "🥇"
        assert position_marker(4) == "🟢"
        assert position_marker(6) == "🔵"
        assert position_marker(10) == "⚪"
        assert position_marker(18) == "🔴"

    def test_standings_goal_difference_signed(self, standings_payload):
        text = format_standings(Standings(**standings_payload))
        assert "GD:+35" in text
        assert "GD:-25" in text
        assert "🔴 18. Hellas Verona FC" in text

    def test_standings_unknown_values_are_dashes(self):
        data = Standings(standings=[{"table": [{"position": 1, "team": {"name": "Inter"}}]}])
        text = format_standings(data)
        assert "Pts: - | P: -" in text
        assert "GD:-" in text

    def test_standings_empty(self):
        assert format_standings(Standings()) is None

    def test_top_scorers_optional_fields(self):
        data = ScorerList(scorers=[
            {"player": {"name": "A"}, "team": {"name": "X"}, "goals": 10, "assists": 0, "penalties": 0},
            {"player": {"name": "B"}, "team": {"name": "Y"}, "goals": 9},
        ])
        text = format_top_scorers(data)
        assert "Goals: 10 | 🅰️ Assists: 0\n" in text
        assert "Penalties" not in text
        assert "Goals: 9\n" in text

    def test_today_unknown_score_is_not_zero(self, match_payload):
        match_payload["status"] = "IN_PLAY"
        match_payload["score"]["fullTime"] = {"home": None, "away": None}
        text = format_today(MatchList(matches=[match_payload]))
        assert "(--)" not in text
        assert "(- - -)" not in text
        assert "Inter vs Milan (---)" in text
        assert "🔴" in text

    def test_today_scheduled_has_no_score(self, match_payload):
        match_payload["status"] = "TIMED"
        text = format_today(MatchList(matches=[match_payload]))
        assert "Inter vs Milan\n" in text

    def test_head_to_head_tally(self, match_payload):
        away_win = dict(match_payload)
        away_win["homeTeam"] = match_payload["awayTeam"]
        away_win["awayTeam"] = match_payload["homeTeam"]
        draw = dict(match_payload, score={"fullTime": {"home": 1, "away": 1}})
        other = dict(match_payload, awayTeam={"id": 5, "name": "Bayern"})
        scheduled = dict(match_payload, status="SCHEDULED")

        data = MatchList(matches=[match_payload, away_win, draw, other, scheduled])
        text = format_head_to_head(108, 98, data)
        # match_payload: Inter beat Milan; away_win: Milan (home) 2-1 Inter
        assert "Team 1 wins: 1" in text
        assert "Draws: 1" in text
        assert "Team 2 wins: 1" in text

    def test_head_to_head_none_found(self):
        assert format_head_to_head(1, 2, MatchList()) is None
