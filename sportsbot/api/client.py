"""Async httpx wrappers for the football-data.org and api-sports APIs."""

from __future__ import annotations

from typing import Any

import httpx

FOOTBALL_BASE_URL = "https://api.football-data.org/v4"
BASKETBALL_BASE_URL = "https://v1.basketball.api-sports.io"
BASKETBALL_HOST = "v1.basketball.api-sports.io"


class APIClient:
    """Authenticated async JSON client. Subclasses supply base URL and headers."""

    base_url = ""

    def __init__(
        self,
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._api_key = api_key
        kwargs: dict[str, Any] = {
            "base_url": self.base_url,
            "timeout": timeout,
            "headers": self.auth_headers(),
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)

    def auth_headers(self) -> dict[str, str]:
        return {}

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make an authenticated GET request and return JSON."""
        response = await self._client.get(path, params=params or None)
        response.raise_for_status()
        return response.json()


class FootballDataClient(APIClient):
    """Client for football-data.org v4."""

    base_url = FOOTBALL_BASE_URL

    def auth_headers(self) -> dict[str, str]:
        return {"X-Auth-Token": self._api_key}


class BasketballClient(APIClient):
    """Client for api-sports basketball v1."""

    base_url = BASKETBALL_BASE_URL

    def auth_headers(self) -> dict[str, str]:
        return {
            "x-rapidapi-key": self._api_key,
            "x-rapidapi-host": BASKETBALL_HOST,
        }

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """api-sports wraps results in a "response" envelope; unwrap it."""
        data = await super().get(path, params)
        if isinstance(data, dict):
            return data.get("response") or []
        return data
