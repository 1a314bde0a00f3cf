"""Entry point: run the football or basketball bot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sportsbot.config import Settings, load_settings

log = logging.getLogger(__name__)


def missing_credentials(kind: str, settings: Settings) -> list[str]:
    """Names of settings the bot cannot start without."""
    token = settings.football_bot_token if kind == "football" else settings.basketball_bot_token
    missing = []
    if not token:
        missing.append(f"{kind.upper()}_BOT_TOKEN")
    if not settings.telegram_api_id:
        missing.append("TELEGRAM_API_ID")
    if not settings.telegram_api_hash:
        missing.append("TELEGRAM_API_HASH")
    return missing


def main(argv: list[str] | None = None) -> None:
    from sportsbot.bot.runner import BOT_KINDS, run

    parser = argparse.ArgumentParser(prog="sportsbot", description=__doc__)
    parser.add_argument("kind", choices=BOT_KINDS, help="which bot to run")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    missing = missing_credentials(args.kind, settings)
    if missing:
        log.error("Missing configuration: %s (set them in .env)", ", ".join(missing))
        sys.exit(1)
    api_key = settings.football_api_key if args.kind == "football" else settings.basketball_api_key
    if not api_key:
        log.warning("No %s API key configured; upstream requests will fail", args.kind)

    try:
        code = asyncio.run(run(args.kind, settings))
    except KeyboardInterrupt:
        log.info("Interrupted")
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
