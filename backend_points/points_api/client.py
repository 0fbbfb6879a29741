"""
Async client for the points service.

Every call is its own failure domain: transport errors, non-2xx responses
and non-JSON bodies all raise NetworkFailure tagged with the endpoint path.
Returns raw JSON; normalization lives in backend_points.points.normalizer.
"""

from __future__ import annotations

from typing import Any

import httpx

from backend_points.config.env import DEFAULT_POINTS_API_HOST
from backend_points.core.exceptions import NetworkFailure
from backend_points.points_logging import get_logger, short_wallet

logger = get_logger(__name__)

LEADERBOARD_PATH = "/points/leaderboard"
CONFIG_PATH = "/points/config"
POINTS_PATH = "/points"
ADJUSTMENTS_PATH = "/points/adjustments"
CLICK_PATH = "/points/click"


class PointsApiClient:
    def __init__(
        self,
        host: str = DEFAULT_POINTS_API_HOST,
        *,
        timeout_sec: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._host = host.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_sec))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "PointsApiClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            resp = await self._client.get(f"{self._host}{path}", params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise NetworkFailure(path, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise NetworkFailure(path, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise NetworkFailure(path, f"invalid JSON: {e}") from e

    async def get_leaderboard(self) -> list[dict[str, Any]]:
        return await self._get_json(LEADERBOARD_PATH)

    async def get_config(self) -> list[dict[str, Any]]:
        return await self._get_json(CONFIG_PATH)

    async def get_account(self, wallet: str) -> dict[str, Any]:
        return await self._get_json(POINTS_PATH, {"wallet": wallet})

    async def get_adjustments(self, wallet: str) -> list[dict[str, Any]]:
        return await self._get_json(ADJUSTMENTS_PATH, {"wallet": wallet})

    async def click(self, wallet: str) -> dict[str, Any]:
        """Submit one click; response is {current, max, success}."""
        logger.debug("points_click_request", wallet_id=short_wallet(wallet))
        return await self._get_json(CLICK_PATH, {"wallet": wallet})
