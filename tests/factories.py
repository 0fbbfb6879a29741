"""
Shared test data: wallets, raw server records, a fake /points service and a
mocked Solana RPC whose numbers give an average slot time of 0.5s.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx

# Valid Solana pubkeys (base58, 32 bytes)
WALLET_A = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
WALLET_B = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"

API_HOST = "https://points.test"

# getBlocks yields SAMPLED_SLOT, its block time is 0 and the clock reads NOW,
# so (NOW - 0) / (CURRENT_SLOT - SAMPLED_SLOT) == 0.5
CURRENT_SLOT = 6_000_000
SAMPLED_SLOT = 999_996
NOW = 0.5 * (CURRENT_SLOT - SAMPLED_SLOT)
AVG_SLOT_TIME = 0.5

CONNECT_ERROR = object()


def raw_record(
    wallet: str,
    quantity: str = "100",
    points_per_slot: str = "1",
    slot: int = CURRENT_SLOT,
    rank: int = 0,
    rank_delta: int = 0,
) -> dict[str, Any]:
    """Raw /points record as the server returns it (0-based rank, string decimals)."""
    return {
        "id": 1,
        "wallet": wallet,
        "quantity": quantity,
        "timestamp": 1_700_000_000,
        "slot": slot,
        "stale": False,
        "rank": rank,
        "rankDelta": rank_delta,
        "pointsPerSlot": points_per_slot,
    }


class FakePointsServer:
    """In-memory /points service; routes map path → (status, body)."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def set(self, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[path] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path not in self.routes:
            return httpx.Response(404, json={"error": "not found"})
        status, body = self.routes[request.url.path]
        if body is CONNECT_ERROR:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(status, json=body)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


def make_rpc(blocks: list[int] | None = None, block_time: int | None = 0) -> MagicMock:
    rpc = MagicMock()
    rpc.get_blocks = AsyncMock(return_value=[SAMPLED_SLOT] if blocks is None else blocks)
    rpc.get_block_time = AsyncMock(return_value=block_time)
    rpc.get_slot = AsyncMock(return_value=CURRENT_SLOT)
    return rpc
