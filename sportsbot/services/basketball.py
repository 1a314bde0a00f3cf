"""Basketball data: cached model lists plus text rendering for the bot."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Awaitable, Callable

import httpx
from pydantic import TypeAdapter, ValidationError

from sportsbot.api.client import BasketballClient
from sportsbot.api.endpoints import (
    get_games_by_date,
    get_league_standings,
    get_league_teams,
    get_live_games,
    get_player,
    get_player_season_stats,
    search_players,
    search_teams,
)
from sportsbot.api.models import (
    BasketballStanding,
    BasketballTeam,
    Game,
    Player,
    PlayerSeasonStats,
)
from sportsbot.config import Settings
from sportsbot.services.cache import CacheManager

log = logging.getLogger(__name__)

UPSTREAM_ERRORS = (httpx.HTTPError, ValidationError, KeyError, ValueError)

MAX_SEARCH_RESULTS = 5
MAX_LIVE_GAMES = 10

GAMES = TypeAdapter(list[Game])
STANDINGS = TypeAdapter(list[BasketballStanding])
TEAMS = TypeAdapter(list[BasketballTeam])
PLAYER = TypeAdapter(Player)
PLAYER_STATS = TypeAdapter(PlayerSeasonStats)

ERROR_TEXT = "❌ The basketball service is unavailable right now. Try again later."


def _n(value: Any) -> str:
    return "-" if value is None else str(value)


def _avg(value: float | None) -> str:
    return "-" if value is None else f"{value:.1f}"


# ── Rendering ──


def format_games(title: str, games: list[Game]) -> str:
    if not games:
        return f"{title}\n\nNo games found."
    lines = [title, ""]
    for game in games:
        home, away = game.teams.home, game.teams.away
        lines.append(
            f"🏀 {home.name} {_n(game.scores.home.total)} - "
            f"{_n(game.scores.away.total)} {away.name}"
        )
        league = f" | {game.league.name}" if game.league else ""
        lines.append(f"   {game.date.strftime('%H:%M')} | {game.status.long or '-'}{league}")
        lines.append("")
    return "\n".join(lines)


def format_standings(rows: list[BasketballStanding]) -> str:
    if not rows:
        return "❌ Standings are not available."
    lines = ["📊 NBA STANDINGS", ""]
    for row in rows:
        lines.append(
            f"{row.position}. {row.team.name} "
            f"({_n(row.games.win.total)}-{_n(row.games.lose.total)})"
        )
    return "\n".join(lines)


def format_teams(teams: list[BasketballTeam]) -> str:
    if not teams:
        return "❌ No teams found."
    lines = ["🏟️ TEAMS", ""]
    for team in teams:
        country = team.country.name if team.country and team.country.name else "-"
        lines.append(f"• {team.name} ({country})")
    return "\n".join(lines)


def format_player(player: Player, stats: PlayerSeasonStats | None = None) -> str:
    lines = [
        f"👤 {player.name}",
        "",
        f"🌍 Country: {player.nationality or '-'}",
        f"📅 Born: {player.birth.date if player.birth and player.birth.date else '-'}",
        f"📏 Height: {player.height or '-'}",
        f"⚖️ Weight: {player.weight or '-'}",
        f"🏀 Team: {player.team.name if player.team else '-'}",
    ]
    if player.leagues:
        lines.append(f"🏆 League: {player.leagues[0].name}")
    if stats is not None:
        lines += [
            "",
            "📈 SEASON STATS",
            f"Games: {_n(stats.games)}",
            f"Points: {_avg(stats.points)} | Rebounds: {_avg(stats.rebounds)} | "
            f"Assists: {_avg(stats.assists)}",
            f"Steals: {_avg(stats.steals)} | Blocks: {_avg(stats.blocks)}",
        ]
    return "\n".join(lines)


def format_player_results(query: str, players: list[Player]) -> str:
    if not players:
        return f"❌ No player found named: {query}"
    lines = [f"🔍 SEARCH RESULTS: {query}", ""]
    for i, player in enumerate(players, start=1):
        team = player.team.name if player.team else "-"
        lines.append(f"{i}. {player.name} ({team})")
    return "\n".join(lines)


class BasketballService:
    """Caches serialized upstream models; rendering is left to the caller."""

    def __init__(
        self,
        settings: Settings,
        cache: CacheManager,
        client: BasketballClient | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings
        self.cache = cache
        self.client = client or BasketballClient(
            settings.basketball_api_key, timeout=settings.request_timeout,
        )
        self._today = today

    async def close(self) -> None:
        await self.client.close()

    @property
    def league_category(self) -> str:
        return str(self.settings.basketball_league_id)

    async def _through_cache(
        self,
        key: str,
        adapter: TypeAdapter,
        fetch: Callable[[], Awaitable[Any]],
        *,
        category: str | None,
        ttl_name: str,
    ) -> Any:
        """Cached value for key, else fetch and store it. None on failure."""
        cached = self.cache.get(key)
        if cached is not None:
            try:
                return adapter.validate_json(cached)
            except ValidationError:
                log.warning("Ignoring unreadable cache entry %s", key)
        try:
            value = await fetch()
        except UPSTREAM_ERRORS:
            log.exception("Failed to fetch %s", key)
            return None
        if value is None or value == []:
            return value
        payload = adapter.dump_json(value).decode()
        self.cache.put(key, payload, category, self.settings.ttl(ttl_name))
        return value

    async def live_games(self) -> list[Game] | None:
        async def fetch() -> list[Game]:
            return (await get_live_games(self.client))[:MAX_LIVE_GAMES]

        return await self._through_cache(
            "nba_live", GAMES, fetch, category=None, ttl_name="live",
        )

    async def today_games(self) -> list[Game] | None:
        day = self._today()

        async def fetch() -> list[Game]:
            return await get_games_by_date(
                self.client, day,
                league=self.settings.basketball_league_id,
                season=self.settings.basketball_season,
            )

        return await self._through_cache(
            f"nba_games_{day.isoformat()}", GAMES, fetch,
            category=self.league_category, ttl_name="nba_today",
        )

    async def standings(self) -> list[BasketballStanding] | None:
        async def fetch() -> list[BasketballStanding]:
            return await get_league_standings(
                self.client,
                league=self.settings.basketball_league_id,
                season=self.settings.basketball_season,
            )

        return await self._through_cache(
            f"nba_standings_{self.settings.basketball_season}", STANDINGS, fetch,
            category=self.league_category, ttl_name="nba_standings",
        )

    async def teams(self) -> list[BasketballTeam] | None:
        async def fetch() -> list[BasketballTeam]:
            return await get_league_teams(
                self.client,
                league=self.settings.basketball_league_id,
                season=self.settings.basketball_season,
            )

        return await self._through_cache(
            f"nba_teams_{self.settings.basketball_season}", TEAMS, fetch,
            category=self.league_category, ttl_name="nba_teams",
        )

    async def player(self, player_id: int) -> Player | None:
        async def fetch() -> Player | None:
            return await get_player(self.client, player_id)

        return await self._through_cache(
            f"player_{player_id}", PLAYER, fetch, category=None, ttl_name="player",
        )

    async def player_stats(self, player_id: int, team_id: int) -> PlayerSeasonStats | None:
        async def fetch() -> PlayerSeasonStats | None:
            return await get_player_season_stats(
                self.client, player_id, team_id, season=self.settings.basketball_season,
            )

        return await self._through_cache(
            f"player_stats_{player_id}_{team_id}", PLAYER_STATS, fetch,
            category=None, ttl_name="player_stats",
        )

    async def search_players(self, name: str) -> list[Player] | None:
        try:
            players = await search_players(self.client, name)
        except UPSTREAM_ERRORS:
            log.exception("Player search failed for %r", name)
            return None
        return players[:MAX_SEARCH_RESULTS]

    async def search_teams(self, name: str) -> list[BasketballTeam] | None:
        try:
            teams = await search_teams(self.client, name)
        except UPSTREAM_ERRORS:
            log.exception("Team search failed for %r", name)
            return None
        return teams[:MAX_SEARCH_RESULTS]
