"""Tests for the HTTP clients and fetch functions against a mock transport."""

from __future__ import annotations

from datetime import date

import httpx
import pytest

from sportsbot.api.client import BasketballClient, FootballDataClient
from sportsbot.api.endpoints import (
    get_games_by_date,
    get_league_standings,
    get_player,
    get_player_season_stats,
    get_standings,
)


def _transport(payload, seen: list[httpx.Request], status: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json=payload)

    return httpx.MockTransport(handler)


async def test_football_client_sends_auth_token(standings_payload):
    seen: list[httpx.Request] = []
    client = FootballDataClient("secret", transport=_transport(standings_payload, seen))
    try:
        standings = await get_standings(client, "SA")
    finally:
        await client.close()

    assert seen[0].headers["X-Auth-Token"] == "secret"
    assert seen[0].url.path == "/v4/competitions/SA/standings"
    assert standings.competition.name == "Serie A"
    assert standings.standings[0].table[0].team.name == "FC Internazionale Milano"


async def test_http_error_propagates():
    seen: list[httpx.Request] = []
    client = FootballDataClient("secret", transport=_transport({}, seen, status=403))
    try:
        with pytest.raises(httpx.HTTPStatusError):
            await client.get("/competitions/SA/standings")
    finally:
        await client.close()


async def test_basketball_client_headers_and_envelope(game_payload):
    seen: list[httpx.Request] = []
    client = BasketballClient(
        "secret", transport=_transport({"results": 1, "response": [game_payload]}, seen),
    )
    try:
        games = await get_games_by_date(client, date(2026, 3, 1), league=12, season="2025-2026")
    finally:
        await client.close()

    request = seen[0]
    assert request.headers["x-rapidapi-key"] == "secret"
    assert request.headers["x-rapidapi-host"] == "v1.basketball.api-sports.io"
    assert request.url.params["date"] == "2026-03-01"
    assert request.url.params["league"] == "12"
    assert games[0].teams.away.name == "Boston Celtics"


async def test_basketball_empty_envelope():
    seen: list[httpx.Request] = []
    client = BasketballClient("secret", transport=_transport({"response": []}, seen))
    try:
        assert await get_player(client, 1) is None
    finally:
        await client.close()


async def test_grouped_standings_are_flattened():
    row = {"position": 1, "team": {"id": 1, "name": "Celtics"}}
    other = {"position": 1, "team": {"id": 2, "name": "Thunder"}}
    seen: list[httpx.Request] = []
    client = BasketballClient("secret", transport=_transport({"response": [[row], [other]]}, seen))
    try:
        rows = await get_league_standings(client, league=12, season="2025-2026")
    finally:
        await client.close()

    assert [r.team.name for r in rows] == ["Celtics", "Thunder"]


async def test_player_season_stats_without_statistics():
    seen: list[httpx.Request] = []
    client = BasketballClient(
        "secret", transport=_transport({"response": [{"statistics": []}]}, seen),
    )
    try:
        assert await get_player_season_stats(client, 265, 145, season="2025-2026") is None
    finally:
        await client.close()
