"""Transport-independent bot core shared by the football and basketball bots."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sportsbot.bot.commands import Command, parse_callback, parse_message
from sportsbot.services.query_log import QueryLog
from sportsbot.services.users import FavoritesStore, UserStore

log = logging.getLogger(__name__)

GENERIC_ERROR = "❌ Something went wrong. Please try again later."
UNKNOWN_COMMAND = "❌ Command not recognized. Use /help to see the available commands."
HISTORY_SIZE = 5


@dataclass
class Reply:
    """One outgoing message. buttons is a list of rows of (label, callback_data)."""

    text: str
    buttons: list[list[tuple[str, str]]] = field(default_factory=list)


@dataclass(frozen=True)
class ChatUser:
    id: int
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class SportsBot:
    """Registers users, decodes input and turns commands into replies."""

    def __init__(
        self,
        users: UserStore,
        query_log: QueryLog,
        favorites: FavoritesStore,
    ) -> None:
        self.users = users
        self.query_log = query_log
        self.favorites = favorites

    async def on_message(self, user: ChatUser, text: str) -> list[Reply]:
        self.users.register(user.id, user.username, user.first_name, user.last_name)
        self.users.touch_activity(user.id)
        command = parse_message(text)
        log.info("Command %r from user %s", text, user.id)
        return await self._dispatch(user, command)

    async def on_callback(self, user: ChatUser, data: str) -> list[Reply]:
        self.users.register(user.id, user.username, user.first_name, user.last_name)
        self.users.touch_activity(user.id)
        command = parse_callback(data)
        log.info("Callback %r from user %s", data, user.id)
        return await self._dispatch(user, command)

    async def _dispatch(self, user: ChatUser, command: Command) -> list[Reply]:
        try:
            return await self.handle(user, command)
        except Exception:
            log.exception("Failed to handle %r for user %s", command, user.id)
            return [Reply(GENERIC_ERROR)]

    async def handle(self, user: ChatUser, command: Command) -> list[Reply]:
        raise NotImplementedError

    def stats_reply(self, user_id: int) -> Reply:
        lines = ["📈 YOUR STATS", ""]
        profile = self.users.get_user(user_id)
        if profile is not None:
            lines.append(f"💬 Messages: {profile.message_count}")
        lines.append(f"🔎 Queries: {self.query_log.count_for_user(user_id)}")
        lines.append("")

        history = self.query_log.recent(user_id, HISTORY_SIZE)
        if history:
            lines.append(f"📜 Last {HISTORY_SIZE} queries:")
            lines += [f"• {entry.describe()}" for entry in history]
        else:
            lines.append("📭 No queries yet.")
        return Reply("\n".join(lines))
