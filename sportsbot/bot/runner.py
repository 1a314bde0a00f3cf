"""Telethon wiring and process lifecycle for a bot."""

from __future__ import annotations

import logging
import sqlite3

from telethon import Button, TelegramClient, errors, events

from sportsbot.bot.basketball_bot import BasketballBot
from sportsbot.bot.football_bot import FootballBot
from sportsbot.bot.handlers import ChatUser, Reply, SportsBot
from sportsbot.config import Settings
from sportsbot.services.basketball import BasketballService
from sportsbot.services.cache import CacheManager
from sportsbot.services.db import Database
from sportsbot.services.football import FootballService
from sportsbot.services.query_log import QueryLog
from sportsbot.services.users import FavoritesStore, UserStore

log = logging.getLogger(__name__)

BOT_KINDS = ("football", "basketball")


def db_path_for(kind: str, settings: Settings) -> str:
    return settings.football_db_path if kind == "football" else settings.basketball_db_path


def bot_token_for(kind: str, settings: Settings) -> str:
    return settings.football_bot_token if kind == "football" else settings.basketball_bot_token


def build_bot(
    kind: str, settings: Settings, db: Database,
) -> tuple[SportsBot, FootballService | BasketballService]:
    """Wire stores and the sport service around an open database."""
    cache = CacheManager(db)
    users = UserStore(db)
    query_log = QueryLog(db)
    favorites = FavoritesStore(db)
    if kind == "football":
        football = FootballService(settings, cache)
        return FootballBot(football, users, query_log, favorites), football
    if kind == "basketball":
        basketball = BasketballService(settings, cache)
        return BasketballBot(basketball, users, query_log, favorites), basketball
    raise ValueError(f"Unknown bot kind: {kind}")


def _buttons(reply: Reply) -> list[list[Button]] | None:
    if not reply.buttons:
        return None
    return [
        [Button.inline(label, data.encode()) for label, data in row]
        for row in reply.buttons
    ]


async def _chat_user(event) -> ChatUser:
    sender = await event.get_sender()
    return ChatUser(
        id=event.sender_id,
        username=getattr(sender, "username", None),
        first_name=getattr(sender, "first_name", None),
        last_name=getattr(sender, "last_name", None),
    )


async def _send(event, replies: list[Reply]) -> None:
    for reply in replies:
        try:
            await event.respond(reply.text, buttons=_buttons(reply))
        except errors.RPCError:
            log.exception("Failed to send message to chat %s", event.chat_id)


def attach(client: TelegramClient, bot: SportsBot) -> None:
    """Register the bot's message and callback handlers on a client."""

    @client.on(events.NewMessage(incoming=True))
    async def on_message(event) -> None:
        if not event.raw_text:
            return
        user = await _chat_user(event)
        await _send(event, await bot.on_message(user, event.raw_text))

    @client.on(events.CallbackQuery)
    async def on_callback(event) -> None:
        await event.answer()
        user = await _chat_user(event)
        data = event.data.decode(errors="replace")
        await _send(event, await bot.on_callback(user, data))


async def run(kind: str, settings: Settings) -> int:
    """Open storage, sweep the cache once, and serve until disconnected."""
    db = Database(db_path_for(kind, settings))
    try:
        db.open()
    except sqlite3.Error:
        log.exception("Cannot open database %s", db.db_path)
        return 1

    CacheManager(db).sweep_expired()
    bot, service = build_bot(kind, settings, db)
    client = TelegramClient(
        f"{kind}_bot", settings.telegram_api_id, settings.telegram_api_hash,
    )
    attach(client, bot)

    try:
        await client.start(bot_token=bot_token_for(kind, settings))
        log.info("%s bot online", kind.capitalize())
        await client.run_until_disconnected()
    finally:
        log.info("Shutting down %s bot", kind)
        await service.close()
        db.close()
    return 0
