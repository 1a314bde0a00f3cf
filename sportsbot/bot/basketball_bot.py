"""Basketball bot: live scores, today's games, standings and player lookups."""

from __future__ import annotations

import logging

from sportsbot.bot import keyboards
from sportsbot.bot.commands import (
    Command,
    FavoritePlayer,
    Help,
    Live,
    PlayerInfo,
    Preferences,
    Search,
    Standings,
    Start,
    Stats,
    TeamSearch,
    Teams,
    Today,
)
from sportsbot.bot.handlers import UNKNOWN_COMMAND, ChatUser, Reply, SportsBot
from sportsbot.services.basketball import (
    ERROR_TEXT,
    BasketballService,
    format_games,
    format_player,
    format_player_results,
    format_standings,
    format_teams,
)
from sportsbot.services.query_log import QueryLog
from sportsbot.services.users import FavoritesStore, PreferenceField, UserStore

log = logging.getLogger(__name__)

WELCOME = """🏀 Welcome to Basketball Bot! 🏀

Follow the NBA from Telegram:
• 🔴 Live games
• 📅 Today's schedule
• 📊 Standings
• 👤 Player profiles and season stats

Use /help to see every command."""

HELP = """📋 AVAILABLE COMMANDS:

/start - Welcome message
/help - Show this message
/live - Live games
/today - Today's NBA games
/standings - NBA standings
/teams - NBA teams
/search [name] - Search for a player
/team [name] - Search for a team
/preferences - Show your favorites
/stats - Show your statistics

📌 EXAMPLE:
/search LeBron James"""


class BasketballBot(SportsBot):
    """Maps basketball commands onto BasketballService and the user stores."""

    def __init__(
        self,
        basketball: BasketballService,
        users: UserStore,
        query_log: QueryLog,
        favorites: FavoritesStore,
    ) -> None:
        super().__init__(users, query_log, favorites)
        self.basketball = basketball

    async def handle(self, user: ChatUser, command: Command) -> list[Reply]:
        match command:
            case Start():
                return [Reply(WELCOME)]
            case Help():
                return [Reply(HELP)]
            case Live():
                self.query_log.log(user.id, "LIVE_GAMES", None)
                games = await self.basketball.live_games()
                if games is None:
                    return [Reply(ERROR_TEXT)]
                return [Reply(format_games("🔴 LIVE GAMES", games))]
            case Today():
                self.query_log.log(user.id, "TODAY_MATCHES", None)
                games = await self.basketball.today_games()
                if games is None:
                    return [Reply(ERROR_TEXT)]
                return [Reply(format_games("📅 TODAY'S GAMES", games))]
            case Standings():
                self.query_log.log(
                    user.id, "STANDINGS", self.basketball.league_category,
                )
                rows = await self.basketball.standings()
                if rows is None:
                    return [Reply(ERROR_TEXT)]
                return [Reply(format_standings(rows))]
            case Teams():
                teams = await self.basketball.teams()
                if teams is None:
                    return [Reply(ERROR_TEXT)]
                return [Reply(format_teams(teams))]
            case Search(query) if not query:
                return [Reply("❌ Usage: /search First Last")]
            case Search(query):
                self.query_log.log(user.id, "PLAYER_SEARCH", query)
                players = await self.basketball.search_players(query)
                if players is None:
                    return [Reply(ERROR_TEXT)]
                buttons = keyboards.player_results([(p.id, p.name) for p in players])
                return [Reply(format_player_results(query, players), buttons)]
            case TeamSearch(query) if not query:
                return [Reply("❌ Usage: /team Name")]
            case TeamSearch(query):
                self.query_log.log(user.id, "TEAM_SEARCH", query)
                teams = await self.basketball.search_teams(query)
                if teams is None:
                    return [Reply(ERROR_TEXT)]
                if not teams:
                    return [Reply(f"❌ No team found named: {query}")]
                return [Reply(format_teams(teams))]
            case PlayerInfo(player_id):
                self.query_log.log(user.id, "PLAYER_INFO", str(player_id))
                return [await self._player_card(player_id)]
            case FavoritePlayer(player_id):
                return [await self._add_favorite_player(user.id, player_id)]
            case Preferences():
                return [self._preferences(user.id)]
            case Stats():
                return [self.stats_reply(user.id)]
            case _:
                return [Reply(UNKNOWN_COMMAND)]

    async def _player_card(self, player_id: int) -> Reply:
        player = await self.basketball.player(player_id)
        if player is None:
            return Reply("❌ Player not found.")
        stats = None
        if player.team and player.team.id is not None:
            stats = await self.basketball.player_stats(player_id, player.team.id)
        return Reply(format_player(player, stats), keyboards.player_actions(player_id))

    async def _add_favorite_player(self, user_id: int, player_id: int) -> Reply:
        player = await self.basketball.player(player_id)
        if player is None:
            return Reply("❌ Player not found.")
        team = player.team.name if player.team else None
        added = self.favorites.add_player(user_id, player_id, player.name, team)
        self.users.set_preference(user_id, PreferenceField.FAVORITE_ENTITY, player.name)
        if added:
            return Reply(f"⭐ {player.name} added to your favorites!")
        return Reply(f"⭐ {player.name} is already in your favorites.")

    def _preferences(self, user_id: int) -> Reply:
        lines = ["⚙️ YOUR PREFERENCES", ""]
        favorite = self.users.get_preference(user_id, PreferenceField.FAVORITE_ENTITY)
        lines.append(f"⭐ Latest favorite: {favorite or 'Not set'}")

        most_queried = self.query_log.most_frequent_category(user_id)
        if most_queried:
            lines.append(f"📊 Most queried: {most_queried}")

        players = self.favorites.players(user_id)
        if players:
            lines += ["", "❤️ Favorite players:"]
            lines += [f"• {p.player_name} ({p.team or '-'})" for p in players]
        else:
            lines += ["", "No favorite players yet. Use /search to find one."]
        return Reply("\n".join(lines))
