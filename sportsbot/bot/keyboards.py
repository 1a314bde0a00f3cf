"""Inline keyboard layouts and the static league/team catalogues."""

from __future__ import annotations

from sportsbot.bot.handlers import Reply

LEAGUES: dict[str, str] = {
    "SA": "🇮🇹 Serie A",
    "PL": "🏴󠁧󠁢󠁥󠁮󠁧󠁿 Premier League",
    "PD": "🇪🇸 La Liga",
    "BL1": "🇩🇪 Bundesliga",
    "FL1": "🇫🇷 Ligue 1",
    "CL": "🏆 Champions League",
}

# team_id -> (display name, league code)
FOOTBALL_TEAMS: dict[int, tuple[str, str]] = {
    108: ("Inter", "SA"),
    98: ("Milan", "SA"),
    109: ("Juventus", "SA"),
    100: ("Roma", "SA"),
    113: ("Napoli", "SA"),
    66: ("Manchester United", "PL"),
    65: ("Manchester City", "PL"),
    64: ("Liverpool", "PL"),
    61: ("Chelsea", "PL"),
    57: ("Arsenal", "PL"),
    86: ("Real Madrid", "PD"),
    81: ("Barcelona", "PD"),
    78: ("Atletico Madrid", "PD"),
    5: ("Bayern Munich", "BL1"),
    4: ("Borussia Dortmund", "BL1"),
}


def league_name(code: str) -> str:
    return LEAGUES.get(code, code)


def league_menu() -> Reply:
    rows = [[(name, f"league_{code}")] for code, name in LEAGUES.items()]
    return Reply("🏆 Choose a league:", rows)


def league_options(code: str) -> Reply:
    return Reply(
        f"✅ Selected: {league_name(code)}\n\n📋 What would you like to see?",
        [
            [("📊 Standings", f"standings_{code}")],
            [("⚽ Matches", f"matches_{code}")],
            [("🥇 Top scorers", f"topscorers_{code}")],
            [("⬅️ Back to leagues", "back_leagues")],
        ],
    )


def teams_menu() -> Reply:
    rows = [[(name, f"team_{team_id}")] for team_id, (name, _) in FOOTBALL_TEAMS.items()]
    rows.append([("⬅️ Main menu", "back_leagues")])
    return Reply("🏟️ Choose a team for detailed info:", rows)


def team_actions(team_id: int) -> list[list[tuple[str, str]]]:
    return [
        [("⭐ Add to favorites", f"favteam_{team_id}")],
        [("⬅️ Back to teams", "back_teams")],
    ]


def player_results(players: list[tuple[int, str]]) -> list[list[tuple[str, str]]]:
    return [[(name, f"player_{player_id}")] for player_id, name in players]


def player_actions(player_id: int) -> list[list[tuple[str, str]]]:
    return [[("⭐ Add to favorites", f"favplayer_{player_id}")]]
