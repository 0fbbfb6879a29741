"""
Tests for the FastAPI presentation API over a PointsStore.

The store is prepared on its own event loop, then served through TestClient.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from backend_points.api_server.server import create_app
from backend_points.points_api import CLICK_PATH
from tests.factories import CURRENT_SLOT, WALLET_A, WALLET_B


@pytest.fixture
def loaded_store(store):
    async def _prepare():
        await store.set_current_slot(CURRENT_SLOT)
        await store.connect_wallet(WALLET_A)

    asyncio.run(_prepare())
    return store


@pytest.fixture
def client(loaded_store):
    return TestClient(create_app(loaded_store))


def test_health(client):
    """Health reports readiness of slot clock, wallet and account."""
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {
        "status": "ok",
        "slot_clock_ready": True,
        "wallet_connected": True,
        "account_loaded": True,
    }


def test_state(client):
    """State exposes account, click state and computed values as decimal strings."""
    data = client.get("/points/state").json()
    assert data["wallet"] == WALLET_A
    assert data["account"]["rank"] == 1
    assert data["account"]["adjustments"]["click"] == "3"
    assert data["computed_points"] == "100"
    assert data["computed_clicks"] == "3"
    assert data["click_state"] == {"status": "unclicked", "current": None, "max": None}


def test_state_includes_ranked_leaderboard_and_config(client):
    """State carries the ranked leaderboard and the multiplier config from the store snapshot."""
    data = client.get("/points/state").json()
    assert [r["wallet"] for r in data["leaderboard"]] == [WALLET_B, WALLET_A]
    assert [r["sorted_rank"] for r in data["leaderboard"]] == [1, 2]
    assert data["config"] == [{"reserve": "USDC", "market": "main", "side": "supply", "weight": 2.0}]
    assert data["errors"] == {}


def test_leaderboard(client):
    """Leaderboard rows carry sorted rank, delta and direction."""
    rows = client.get("/points/leaderboard").json()
    assert [r["wallet"] for r in rows] == [WALLET_B, WALLET_A]
    assert rows[1]["sorted_rank"] == 2
    assert rows[1]["rank_delta"] == 1
    assert rows[1]["direction"] == "down"
    assert rows[0]["points_per_day"] == "172800"


def test_config_and_breakdown(client):
    """Config and breakdown are readable."""
    assert client.get("/points/config").json()[0]["reserve"] == "USDC"
    b = client.get("/points/breakdown").json()
    # 100 + 0 claim − 3 clicks − 7 margin − 0 manual
    assert b == {"interest": "90", "margin": "7", "clicks": "3", "misc": "0"}


def test_click(client, server, loaded_store):
    """POST /points/click submits once and reports the outcome."""
    r = client.post("/points/click")
    assert r.status_code == 200
    assert r.json() == {"outcome": "clicked", "current": 1, "max": 5, "error": None}
    assert len(server.calls(CLICK_PATH)) == 1
    assert loaded_store.click_state.status.value == "clicked"


def test_disconnect_then_account_missing(client):
    """DELETE /session/wallet clears the account; /points/account then 404s."""
    r = client.delete("/session/wallet")
    assert r.status_code == 200
    assert r.json()["account"] is None
    assert client.get("/points/account").status_code == 404
    assert client.post("/points/click").json()["outcome"] == "rejected"


def test_connect_invalid_wallet(client):
    """An invalid wallet is a 400."""
    r = client.put("/session/wallet", json={"wallet": "not-a-valid-pubkey"})
    assert r.status_code == 400
    assert "Invalid Solana wallet" in r.json()["detail"]


def test_leaderboard_unavailable(store):
    """Before any sync the leaderboard is reported unavailable."""
    client = TestClient(create_app(store))
    assert client.get("/points/leaderboard").status_code == 503
    assert client.get("/points/config").status_code == 503
