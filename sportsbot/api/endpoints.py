"""Typed fetch functions for the football and basketball APIs."""

from __future__ import annotations

import logging
from datetime import date

from sportsbot.api.client import BasketballClient, FootballDataClient
from sportsbot.api.models import (
    BasketballStanding,
    BasketballTeam,
    Game,
    MatchList,
    PersonList,
    Player,
    PlayerSeasonStats,
    ScorerList,
    Standings,
    Team,
)

log = logging.getLogger(__name__)

# ── Football ──


async def get_standings(client: FootballDataClient, league: str) -> Standings:
    data = await client.get(f"/competitions/{league}/standings")
    return Standings(**data)


async def get_matches(
    client: FootballDataClient, league: str, *, status: str = "SCHEDULED",
) -> MatchList:
    data = await client.get(f"/competitions/{league}/matches", params={"status": status})
    return MatchList(**data)


async def get_top_scorers(
    client: FootballDataClient, league: str, *, limit: int = 15,
) -> ScorerList:
    data = await client.get(f"/competitions/{league}/scorers", params={"limit": limit})
    return ScorerList(**data)


async def get_team(client: FootballDataClient, team_id: int) -> Team:
    data = await client.get(f"/teams/{team_id}")
    return Team(**data)


async def search_persons(client: FootballDataClient, name: str) -> PersonList:
    data = await client.get("/persons", params={"name": name})
    return PersonList(**data)


async def get_today_matches(client: FootballDataClient) -> MatchList:
    """Matches across all subscribed competitions for today (API default window)."""
    data = await client.get("/matches")
    return MatchList(**data)


async def get_team_matches(client: FootballDataClient, team_id: int) -> MatchList:
    data = await client.get(f"/teams/{team_id}/matches")
    return MatchList(**data)


# ── Basketball ──


async def search_players(client: BasketballClient, name: str) -> list[Player]:
    data = await client.get("/players", params={"search": name})
    return [Player(**p) for p in data]


async def get_player(client: BasketballClient, player_id: int) -> Player | None:
    data = await client.get("/players", params={"id": player_id})
    return Player(**data[0]) if data else None


async def get_live_games(client: BasketballClient) -> list[Game]:
    data = await client.get("/games", params={"live": "all"})
    return [Game(**g) for g in data]


async def get_games_by_date(
    client: BasketballClient, day: date, *, league: int, season: str,
) -> list[Game]:
    data = await client.get(
        "/games",
        params={"date": day.isoformat(), "league": league, "season": season},
    )
    return [Game(**g) for g in data]


async def search_teams(client: BasketballClient, name: str) -> list[BasketballTeam]:
    data = await client.get("/teams", params={"search": name})
    return [BasketballTeam(**t) for t in data]


async def get_league_teams(
    client: BasketballClient, *, league: int, season: str,
) -> list[BasketballTeam]:
    data = await client.get("/teams", params={"league": league, "season": season})
    return [BasketballTeam(**t) for t in data]


async def get_league_standings(
    client: BasketballClient, *, league: int, season: str,
) -> list[BasketballStanding]:
    """Standings come back grouped (one list per conference); flatten them."""
    data = await client.get("/standings", params={"league": league, "season": season})
    rows: list[BasketballStanding] = []
    for item in data:
        if isinstance(item, list):
            rows.extend(BasketballStanding(**s) for s in item)
        else:
            rows.append(BasketballStanding(**item))
    return rows


async def get_player_season_stats(
    client: BasketballClient, player_id: int, team_id: int, *, season: str,
) -> PlayerSeasonStats | None:
    data = await client.get(
        "/statistics/players",
        params={"player": player_id, "team": team_id, "season": season},
    )
    if not data:
        return None
    stats = data[0].get("statistics") or []
    if not stats:
        log.debug("No season statistics for player %s", player_id)
        return None
    return PlayerSeasonStats(**stats[0])
