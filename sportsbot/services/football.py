"""Football data: cache-through fetches and Telegram-ready text rendering."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

import httpx
from pydantic import ValidationError

from sportsbot.api.client import FootballDataClient
from sportsbot.api.endpoints import (
    get_matches,
    get_standings,
    get_team,
    get_team_matches,
    get_today_matches,
    get_top_scorers,
    search_persons,
)
from sportsbot.api.models import Match, MatchList, PersonList, ScorerList, Standings, Team
from sportsbot.config import Settings
from sportsbot.services.cache import CacheManager

log = logging.getLogger(__name__)

UPSTREAM_ERRORS = (httpx.HTTPError, ValidationError, KeyError, ValueError)

MAX_STANDINGS_ROWS = 20
MAX_MATCHES = 10
MAX_SCORERS = 15
MAX_PERSONS = 10
MAX_TODAY_MATCHES = 20
MAX_H2H_MATCHES = 10

STATUS_MARKERS = {
    "SCHEDULED": "⏰",
    "TIMED": "⏰",
    "IN_PLAY": "🔴",
    "PAUSED": "⏸️",
    "FINISHED": "✅",
}


def _n(value: int | None) -> str:
    return "-" if value is None else str(value)


def position_marker(position: int) -> str:
    if position == 1:
        return "🥇"
    if position == 2:
        return "🥈"
    if position == 3:
        return "🥉"
    if position <= 4:
        return "🟢"  # Champions League
    if position <= 6:
        return "🔵"  # Europa League
    if position >= 18:
        return "🔴"  # relegation
    return "⚪"


def _score(match: Match) -> str:
    full = match.score.fullTime if match.score else None
    if full is None:
        return ""
    return f" ({_n(full.home)}-{_n(full.away)})"


# ── Rendering ──


def format_standings(data: Standings) -> str | None:
    if not data.standings or not data.standings[0].table:
        return None
    name = data.competition.name if data.competition else ""
    lines = ["📊 STANDINGS", name, ""]
    for row in data.standings[0].table[:MAX_STANDINGS_ROWS]:
        gd = "-" if row.goalDifference is None else f"{row.goalDifference:+d}"
        lines.append(f"{position_marker(row.position)} {row.position}. {row.team.name}")
        lines.append(
            f"   Pts: {_n(row.points)} | P: {_n(row.playedGames)} | "
            f"W:{_n(row.won)} D:{_n(row.draw)} L:{_n(row.lost)} | "
            f"GF:{_n(row.goalsFor)} GA:{_n(row.goalsAgainst)} GD:{gd}"
        )
        lines.append("")
    return "\n".join(lines)


def format_matches(data: MatchList) -> str | None:
    if not data.matches:
        return None
    name = data.competition.name if data.competition else ""
    lines = ["⚽ UPCOMING MATCHES", name, ""]
    for match in data.matches[:MAX_MATCHES]:
        when = match.utcDate.strftime("%d/%m/%Y %H:%M")
        prefix = f"Matchday {match.matchday} - " if match.matchday is not None else ""
        lines.append(f"{prefix}{when}")
        lines.append(f"{match.homeTeam.name} vs {match.awayTeam.name}")
        lines.append("")
    return "\n".join(lines)


def format_top_scorers(data: ScorerList) -> str | None:
    if not data.scorers:
        return None
    name = data.competition.name if data.competition else ""
    lines = ["🥇 TOP SCORERS", name, ""]
    medals = ["🥇", "🥈", "🥉"]
    for i, scorer in enumerate(data.scorers[:MAX_SCORERS]):
        rank = medals[i] if i < len(medals) else f"{i + 1}."
        lines.append(f"{rank} {scorer.player.name} ({scorer.team.name})")
        stats = f"   ⚽ Goals: {_n(scorer.goals)}"
        if scorer.assists is not None:
            stats += f" | 🅰️ Assists: {scorer.assists}"
        if scorer.penalties:
            stats += f" | 🎯 Penalties: {scorer.penalties}"
        lines.append(stats)
        lines.append("")
    return "\n".join(lines)


def format_team(team: Team) -> str:
    lines = [
        "🏟️ TEAM INFO",
        "",
        f"📌 Name: {team.name}",
        f"🔤 Short name: {team.shortName or '-'}",
        f"📅 Founded: {_n(team.founded)}",
        f"🏟️ Venue: {team.venue or '-'}",
        f"🎨 Colors: {team.clubColors or '-'}",
    ]
    if team.squad:
        groups = {"Goalkeeper": 0, "Defence": 0, "Midfield": 0, "Offence": 0}
        for person in team.squad:
            for group in groups:
                if person.position and group in person.position:
                    groups[group] += 1
                    break
        lines += [
            "",
            f"👥 SQUAD ({len(team.squad)} players)",
            "",
            f"🧤 Goalkeepers: {groups['Goalkeeper']}",
            f"🛡️ Defenders: {groups['Defence']}",
            f"⚙️ Midfielders: {groups['Midfield']}",
            f"⚡ Forwards: {groups['Offence']}",
        ]
    return "\n".join(lines)


def format_persons(query: str, data: PersonList) -> str | None:
    if not data.persons:
        return None
    lines = [f"🔍 SEARCH RESULTS: {query}", ""]
    for i, person in enumerate(data.persons[:MAX_PERSONS], start=1):
        lines += [
            f"{i}. {person.name}",
            f"   📅 Born: {person.dateOfBirth or '-'}",
            f"   🌍 Nationality: {person.nationality or '-'}",
            f"   ⚽ Position: {person.position or '-'}",
            "",
        ]
    return "\n".join(lines)


def format_today(data: MatchList) -> str | None:
    if not data.matches:
        return None
    lines = ["📅 TODAY'S MATCHES", ""]
    for match in data.matches[:MAX_TODAY_MATCHES]:
        marker = STATUS_MARKERS.get(match.status, "⚪")
        competition = match.competition.name if match.competition else ""
        lines.append(f"{marker} {match.utcDate.strftime('%H:%M')} | {competition}")
        line = f"   {match.homeTeam.short} vs {match.awayTeam.short}"
        if match.is_live_or_finished:
            line += _score(match)
        lines.append(line)
        lines.append("")
    return "\n".join(lines)


def format_head_to_head(team1_id: int, team2_id: int, data: MatchList) -> str | None:
    """Tally finished meetings between two teams (most recent feed order)."""
    wins1 = wins2 = draws = 0
    lines = ["⚔️ HEAD TO HEAD", ""]
    found = 0
    pair = {team1_id, team2_id}
    for match in data.matches:
        if found >= MAX_H2H_MATCHES:
            break
        if {match.homeTeam.id, match.awayTeam.id} != pair or match.status != "FINISHED":
            continue
        full = match.score.fullTime if match.score else None
        if full is None or full.home is None or full.away is None:
            continue
        found += 1
        lines.append(
            f"{match.homeTeam.short} {full.home}-{full.away} {match.awayTeam.short}"
        )
        if full.home == full.away:
            draws += 1
        else:
            winner = match.homeTeam.id if full.home > full.away else match.awayTeam.id
            if winner == team1_id:
                wins1 += 1
            else:
                wins2 += 1
    if not found:
        return None
    lines += [
        "",
        "📊 RECORD:",
        f"Team 1 wins: {wins1}",
        f"Draws: {draws}",
        f"Team 2 wins: {wins2}",
    ]
    return "\n".join(lines)


class FootballService:
    """Serves football artifacts from the cache, fetching on a miss."""

    def __init__(
        self,
        settings: Settings,
        cache: CacheManager,
        client: FootballDataClient | None = None,
    ) -> None:
        self.settings = settings
        self.cache = cache
        self.client = client or FootballDataClient(
            settings.football_api_key, timeout=settings.request_timeout,
        )

    async def close(self) -> None:
        await self.client.close()

    async def _through_cache(
        self,
        key: str,
        category: str | None,
        ttl_name: str,
        render: Callable[[], Awaitable[str | None]],
        *,
        empty_text: str,
        error_text: str,
    ) -> str:
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        try:
            text = await render()
        except UPSTREAM_ERRORS:
            log.exception("Failed to fetch %s", key)
            return error_text
        if text is None:
            return empty_text
        self.cache.put(key, text, category, self.settings.ttl(ttl_name))
        return text

    async def standings(self, league: str) -> str:
        async def render() -> str | None:
            return format_standings(await get_standings(self.client, league))

        return await self._through_cache(
            f"standings_{league}", league, "standings", render,
            empty_text="❌ Standings are not available for this league.",
            error_text="❌ Could not load the standings. Check that the league is active.",
        )

    async def matches(self, league: str) -> str:
        async def render() -> str | None:
            return format_matches(await get_matches(self.client, league))

        return await self._through_cache(
            f"matches_{league}", league, "matches", render,
            empty_text="❌ No scheduled matches at the moment.",
            error_text="❌ Could not load the matches.",
        )

    async def top_scorers(self, league: str) -> str:
        async def render() -> str | None:
            return format_top_scorers(
                await get_top_scorers(self.client, league, limit=MAX_SCORERS)
            )

        return await self._through_cache(
            f"topscorers_{league}", league, "topscorers", render,
            empty_text="❌ Top scorers are not available for this league.",
            error_text="❌ Could not load the top scorers.",
        )

    async def team_info(self, team_id: int) -> str:
        async def render() -> str | None:
            return format_team(await get_team(self.client, team_id))

        return await self._through_cache(
            f"team_{team_id}", None, "team", render,
            empty_text="❌ Team not found.",
            error_text="❌ Could not load the team information.",
        )

    async def today_matches(self) -> str:
        async def render() -> str | None:
            return format_today(await get_today_matches(self.client))

        return await self._through_cache(
            "matches_today", None, "today", render,
            empty_text="❌ No matches scheduled today.",
            error_text="❌ Could not load today's matches.",
        )

    async def head_to_head(self, team1_id: int, team2_id: int) -> str:
        async def render() -> str | None:
            data = await get_team_matches(self.client, team1_id)
            return format_head_to_head(team1_id, team2_id, data)

        return await self._through_cache(
            f"h2h_{team1_id}_{team2_id}", None, "h2h", render,
            empty_text="❌ No head-to-head matches found between these teams.",
            error_text="❌ Could not load the head-to-head history.",
        )

    async def search_player(self, name: str) -> str:
        """Person search is never cached."""
        try:
            data = await search_persons(self.client, name)
        except UPSTREAM_ERRORS:
            log.exception("Player search failed for %r", name)
            return "❌ Player search failed."
        return format_persons(name, data) or f"❌ No player found named: {name}"
