"""Settings for the football and basketball bots, read from .env and settings.yaml."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_TTL_MINUTES = 30


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml() -> dict:
    settings_path = PROJECT_ROOT / "settings.yaml"
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse settings.yaml, using defaults")
            return {}
    return {}


class Settings(BaseModel):
    football_bot_token: str = ""
    basketball_bot_token: str = ""
    telegram_api_id: int = 0
    telegram_api_hash: str = ""
    football_api_key: str = ""
    basketball_api_key: str = ""

    @field_validator(
        "football_bot_token",
        "basketball_bot_token",
        "telegram_api_hash",
        "football_api_key",
        "basketball_api_key",
    )
    @classmethod
    def strip_secret(cls, v: str) -> str:
        return v.strip()

    football_db_path: str = "footballbot.db"
    basketball_db_path: str = "basketball_bot.db"
    log_level: str = "INFO"
    request_timeout: float = 15.0
    basketball_league_id: int = 12  # NBA
    basketball_season: str = "2024-2025"
    # Minutes each artifact stays fresh in the response cache.
    cache_ttl_minutes: dict[str, int] = Field(default_factory=lambda: {
        "standings": 30,
        "matches": 10,
        "topscorers": 60,
        "team": 120,
        "today": 5,
        "h2h": 1440,
        "live": 1,
        "nba_today": 5,
        "nba_standings": 60,
        "nba_teams": 1440,
        "player": 120,
        "player_stats": 60,
    })

    def ttl(self, artifact: str) -> int:
        """TTL in minutes for a cached artifact."""
        return self.cache_ttl_minutes.get(artifact, DEFAULT_TTL_MINUTES)


def load_settings() -> Settings:
    _load_env()
    raw = _load_yaml()
    raw["football_bot_token"] = os.getenv("FOOTBALL_BOT_TOKEN", "")
    raw["basketball_bot_token"] = os.getenv("BASKETBALL_BOT_TOKEN", "")
    raw["telegram_api_id"] = os.getenv("TELEGRAM_API_ID") or 0
    raw["telegram_api_hash"] = os.getenv("TELEGRAM_API_HASH", "")
    raw["football_api_key"] = os.getenv("FOOTBALL_API_KEY", "")
    raw["basketball_api_key"] = os.getenv("BASKETBALL_API_KEY", "")
    return Settings(**raw)
