"""Football bot: leagues, standings, matches, scorers, teams and searches."""

from __future__ import annotations

import logging

from sportsbot.bot import keyboards
from sportsbot.bot.commands import (
    BackLeagues,
    BackTeams,
    Command,
    FavoriteTeam,
    HeadToHead,
    Help,
    LeagueMatches,
    LeagueScorers,
    Leagues,
    LeagueStandings,
    Preferences,
    Search,
    SelectLeague,
    Start,
    Stats,
    TeamInfo,
    Teams,
    Today,
)
from sportsbot.bot.handlers import UNKNOWN_COMMAND, ChatUser, Reply, SportsBot
from sportsbot.services.football import FootballService
from sportsbot.services.query_log import QueryLog
from sportsbot.services.users import FavoritesStore, PreferenceField, UserStore

log = logging.getLogger(__name__)

WELCOME = """⚽ Welcome to Football Bot! ⚽

Up-to-date information on:
• 📊 Standings of the major leagues
• ⚽ Upcoming matches
• 🥇 Top scorers

Use /leagues to get started or /help for more."""

HELP = """📋 AVAILABLE COMMANDS:

/start - Welcome message
/help - Show this message
/leagues - Choose a league
/teams - Detailed team info
/today - Today's matches
/search [name] - Search for a player
/h2h [team id] [team id] - Head-to-head record
/preferences - Show your preferences
/stats - Show your statistics

📌 EXAMPLES:
/search Lautaro Martinez
/h2h 108 98

💡 Data is cached to speed up replies!"""


class FootballBot(SportsBot):
    """Maps football commands onto FootballService and the user stores."""

    def __init__(
        self,
        football: FootballService,
        users: UserStore,
        query_log: QueryLog,
        favorites: FavoritesStore,
    ) -> None:
        super().__init__(users, query_log, favorites)
        self.football = football

    async def handle(self, user: ChatUser, command: Command) -> list[Reply]:
        match command:
            case Start():
                return [Reply(WELCOME)]
            case Help():
                return [Reply(HELP)]
            case Leagues() | BackLeagues():
                return [keyboards.league_menu()]
            case Teams() | BackTeams():
                return [keyboards.teams_menu()]
            case SelectLeague(code) if code in keyboards.LEAGUES:
                self.users.set_preference(user.id, PreferenceField.PREFERRED_CATEGORY, code)
                return [keyboards.league_options(code)]
            case LeagueStandings(code):
                self.query_log.log(user.id, "STANDINGS", code)
                text = await self.football.standings(code)
                return [Reply("⏳ Loading standings..."), Reply(text)]
            case LeagueMatches(code):
                self.query_log.log(user.id, "MATCHES", code)
                text = await self.football.matches(code)
                return [Reply("⏳ Loading matches..."), Reply(text)]
            case LeagueScorers(code):
                self.query_log.log(user.id, "TOPSCORERS", code)
                text = await self.football.top_scorers(code)
                return [Reply("⏳ Loading top scorers..."), Reply(text)]
            case TeamInfo(team_id):
                self.query_log.log(user.id, "TEAM_INFO", str(team_id))
                text = await self.football.team_info(team_id)
                return [
                    Reply("⏳ Loading team info..."),
                    Reply(text, keyboards.team_actions(team_id)),
                ]
            case FavoriteTeam(team_id):
                return [self._add_favorite_team(user.id, team_id)]
            case HeadToHead(team1_id, team2_id):
                self.query_log.log(user.id, "H2H", f"{team1_id}-{team2_id}")
                text = await self.football.head_to_head(team1_id, team2_id)
                return [Reply("⏳ Loading head-to-head..."), Reply(text)]
            case Today():
                self.query_log.log(user.id, "TODAY_MATCHES", None)
                text = await self.football.today_matches()
                return [Reply("⏳ Loading today's matches..."), Reply(text)]
            case Search(query) if not query:
                return [Reply("❌ Usage: /search First Last")]
            case Search(query):
                self.query_log.log(user.id, "PLAYER_SEARCH", query)
                text = await self.football.search_player(query)
                return [Reply(f"🔍 Searching: {query}..."), Reply(text)]
            case Preferences():
                return [self._preferences(user.id)]
            case Stats():
                return [self.stats_reply(user.id)]
            case _:
                return [Reply(UNKNOWN_COMMAND)]

    def _add_favorite_team(self, user_id: int, team_id: int) -> Reply:
        team = keyboards.FOOTBALL_TEAMS.get(team_id)
        if team is None:
            return Reply("❌ Unknown team.")
        name, league = team
        added = self.favorites.add_team(user_id, team_id, name, league)
        self.users.set_preference(user_id, PreferenceField.FAVORITE_ENTITY, name)
        if added:
            return Reply(f"⭐ {name} added to your favorites!")
        return Reply(f"⭐ {name} is already in your favorites.")

    def _preferences(self, user_id: int) -> Reply:
        lines = ["⚙️ YOUR PREFERENCES", ""]

        preferred = self.users.get_preference(user_id, PreferenceField.PREFERRED_CATEGORY)
        lines.append(
            f"🏆 Preferred league: {keyboards.league_name(preferred) if preferred else 'Not set'}"
        )
        favorite = self.users.get_preference(user_id, PreferenceField.FAVORITE_ENTITY)
        lines.append(f"⭐ Favorite team: {favorite or 'Not set'}")

        most_queried = self.query_log.most_frequent_category(user_id)
        if most_queried:
            lines.append(f"📊 Most queried: {keyboards.league_name(most_queried)}")

        teams = self.favorites.teams(user_id)
        if teams:
            lines += ["", "❤️ Favorite teams:"]
            lines += [f"• {t.team_name}" for t in teams]

        lines += ["", "💡 Use /leagues to look up more data!"]
        return Reply("\n".join(lines))
