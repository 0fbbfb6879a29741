"""
Pytest fixtures for points engine tests.

HTTP is served by httpx.MockTransport backed by FakePointsServer; the slot
clock runs on a mocked RPC (see factories.py).
"""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from backend_points.points_api import (
    ADJUSTMENTS_PATH,
    CLICK_PATH,
    CONFIG_PATH,
    LEADERBOARD_PATH,
    POINTS_PATH,
    PointsApiClient,
)
from backend_points.slot_clock import SlotClock
from backend_points.store import PointsStore
from tests.factories import (
    API_HOST,
    NOW,
    WALLET_A,
    WALLET_B,
    FakePointsServer,
    make_rpc,
    raw_record,
)


@pytest.fixture
def server() -> FakePointsServer:
    s = FakePointsServer()
    s.set(
        LEADERBOARD_PATH,
        [
            raw_record(WALLET_A, quantity="10", rank=0),
            raw_record(WALLET_B, quantity="20", rank=0),
        ],
    )
    s.set(CONFIG_PATH, [{"reserve": "USDC", "market": "main", "side": "supply", "weight": 2}])
    s.set(POINTS_PATH, raw_record(WALLET_A))
    s.set(ADJUSTMENTS_PATH, [{"quantity": 3, "type": "click"}, {"quantity": 7, "type": "margin_trade"}])
    s.set(CLICK_PATH, {"current": 1, "max": 5, "success": True})
    return s


@pytest.fixture
def api(server: FakePointsServer) -> PointsApiClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(server.handler))
    return PointsApiClient(API_HOST, http_client=client)


@pytest.fixture
def rpc() -> MagicMock:
    return make_rpc()


@pytest.fixture
def slot_clock(rpc: MagicMock) -> SlotClock:
    return SlotClock(rpc, now=lambda: NOW)


@pytest.fixture
def store(api: PointsApiClient, slot_clock: SlotClock) -> PointsStore:
    return PointsStore(api, slot_clock)
