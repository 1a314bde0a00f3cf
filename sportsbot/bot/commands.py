"""Chat commands and inline-button callbacks decoded into typed variants.

Text and callback payloads are parsed exactly once, here; the bots
dispatch on the resulting dataclasses with ``match``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class Leagues:
    pass


@dataclass(frozen=True)
class Teams:
    pass


@dataclass(frozen=True)
class Today:
    pass


@dataclass(frozen=True)
class Live:
    pass


@dataclass(frozen=True)
class Standings:
    pass


@dataclass(frozen=True)
class Preferences:
    pass


@dataclass(frozen=True)
class Stats:
    pass


@dataclass(frozen=True)
class Search:
    query: str


@dataclass(frozen=True)
class TeamSearch:
    query: str


@dataclass(frozen=True)
class HeadToHead:
    team1_id: int
    team2_id: int


@dataclass(frozen=True)
class SelectLeague:
    code: str


@dataclass(frozen=True)
class LeagueStandings:
    code: str


@dataclass(frozen=True)
class LeagueMatches:
    code: str


@dataclass(frozen=True)
class LeagueScorers:
    code: str


@dataclass(frozen=True)
class TeamInfo:
    team_id: int


@dataclass(frozen=True)
class FavoriteTeam:
    team_id: int


@dataclass(frozen=True)
class PlayerInfo:
    player_id: int


@dataclass(frozen=True)
class FavoritePlayer:
    player_id: int


@dataclass(frozen=True)
class BackLeagues:
    pass


@dataclass(frozen=True)
class BackTeams:
    pass


@dataclass(frozen=True)
class Unknown:
    text: str


Command = (
    Start | Help | Leagues | Teams | Today | Live | Standings | Preferences | Stats
    | Search | TeamSearch | HeadToHead | SelectLeague | LeagueStandings
    | LeagueMatches | LeagueScorers | TeamInfo | FavoriteTeam | PlayerInfo | FavoritePlayer
    | BackLeagues | BackTeams | Unknown
)

_SIMPLE_COMMANDS = {
    "/start": Start,
    "/help": Help,
    "/leagues": Leagues,
    "/teams": Teams,
    "/today": Today,
    "/live": Live,
    "/standings": Standings,
    "/preferences": Preferences,
    "/stats": Stats,
}

_LEAGUE_CALLBACKS = {
    "league": SelectLeague,
    "standings": LeagueStandings,
    "matches": LeagueMatches,
    "topscorers": LeagueScorers,
}

_ID_CALLBACKS = {
    "team": TeamInfo,
    "favteam": FavoriteTeam,
    "player": PlayerInfo,
    "favplayer": FavoritePlayer,
}


def parse_message(text: str) -> Command:
    """Decode "/command args" (an "@botname" suffix is ignored)."""
    text = text.strip()
    if not text.startswith("/"):
        return Unknown(text)
    head, _, args = text.partition(" ")
    name = head.split("@", 1)[0].lower()
    args = args.strip()

    if name in _SIMPLE_COMMANDS:
        return _SIMPLE_COMMANDS[name]()
    if name == "/search":
        return Search(args)
    if name == "/team":
        return TeamSearch(args)
    if name == "/h2h":
        parts = args.split()
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            return HeadToHead(int(parts[0]), int(parts[1]))
    return Unknown(text)


def parse_callback(data: str) -> Command:
    """Decode inline-button payloads of the form "prefix_arg"."""
    if data == "back_leagues":
        return BackLeagues()
    if data == "back_teams":
        return BackTeams()
    prefix, sep, arg = data.partition("_")
    if not sep or not arg:
        return Unknown(data)
    if prefix in _LEAGUE_CALLBACKS:
        return _LEAGUE_CALLBACKS[prefix](arg)
    if prefix in _ID_CALLBACKS and arg.isdigit():
        return _ID_CALLBACKS[prefix](int(arg))
    return Unknown(data)
