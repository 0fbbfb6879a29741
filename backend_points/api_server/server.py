"""
FastAPI routes over a PointsStore.

Read-only views of the store plus POST /points/click and the wallet session
endpoints. Decimals are serialized as strings to keep precision. The store
is attached to app.state; create_app() takes it so tests can pass their own.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from backend_points.core.exceptions import InvalidWalletError
from backend_points.points import (
    ClickResult,
    ClickState,
    LeaderboardEntry,
    PointsAccount,
    PointsConfigEntry,
)
from backend_points.points.ranker import direction
from backend_points.points_logging import get_logger
from backend_points.store import PointsStore

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class AccountResponse(BaseModel):
    wallet: str
    quantity: str = Field(..., description="Authoritative quantity projected to the sync slot")
    points_per_slot: str
    points_per_day: str
    snapshot_slot: int | None = None
    snapshot_timestamp: int | None = None
    rank: int = Field(..., description="1-based server rank")
    rank_delta: int
    stale: bool = False
    adjustments: dict[str, str] = Field(default_factory=dict)


class ClickStateResponse(BaseModel):
    status: str
    current: int | None = None
    max: int | None = None


class ClickResultResponse(BaseModel):
    outcome: str
    current: int | None = None
    max: int | None = None
    error: str | None = None


class LeaderboardEntryResponse(BaseModel):
    wallet: str
    quantity: str
    points_per_day: str
    sorted_rank: int
    rank_delta: int
    direction: str = Field(..., description="up | down | same")


class ConfigEntryResponse(BaseModel):
    reserve: str
    market: str
    side: str
    weight: float


class BreakdownResponse(BaseModel):
    interest: str
    margin: str
    clicks: str
    misc: str


class StateResponse(BaseModel):
    wallet: str | None = None
    current_slot: int | None = None
    avg_slot_time: float | None = None
    account: AccountResponse | None = None
    click_state: ClickStateResponse
    computed_points: str | None = None
    computed_clicks: str | None = None
    leaderboard: list[LeaderboardEntryResponse] | None = None
    config: list[ConfigEntryResponse] | None = None
    errors: dict[str, str] = Field(default_factory=dict)


class WalletRequest(BaseModel):
    wallet: str = Field(..., min_length=8, max_length=64, description="Solana wallet (base58)")


# -----------------------------------------------------------------------------
# Serialization
# -----------------------------------------------------------------------------

def _dec(value: Decimal | None) -> str | None:
    """Plain decimal string without exponent or trailing zeros."""
    if value is None:
        return None
    return format(value.normalize(), "f")


def account_response(account: PointsAccount) -> AccountResponse:
    return AccountResponse(
        wallet=account.wallet,
        quantity=_dec(account.quantity),
        points_per_slot=_dec(account.points_per_slot),
        points_per_day=_dec(account.points_per_day),
        snapshot_slot=account.snapshot_slot,
        snapshot_timestamp=account.snapshot_timestamp,
        rank=account.rank,
        rank_delta=account.rank_delta,
        stale=account.stale,
        adjustments={k: _dec(v) for k, v in account.adjustments.as_dict().items()},
    )


def click_state_response(state: ClickState) -> ClickStateResponse:
    return ClickStateResponse(status=state.status.value, current=state.current, max=state.max)


def leaderboard_response(entries: list[LeaderboardEntry]) -> list[LeaderboardEntryResponse]:
    return [
        LeaderboardEntryResponse(
            wallet=e.wallet,
            quantity=_dec(e.quantity),
            points_per_day=_dec(e.account.points_per_day),
            sorted_rank=e.sorted_rank,
            rank_delta=e.rank_delta,
            direction=direction(e),
        )
        for e in entries
    ]


def config_response(entries: list[PointsConfigEntry]) -> list[ConfigEntryResponse]:
    return [
        ConfigEntryResponse(reserve=c.reserve, market=c.market, side=c.side, weight=c.weight)
        for c in entries
    ]


def state_response(snapshot: dict[str, Any]) -> StateResponse:
    account = snapshot["account"]
    leaderboard = snapshot["leaderboard"]
    config = snapshot["config"]
    return StateResponse(
        wallet=snapshot["wallet"],
        current_slot=snapshot["current_slot"],
        avg_slot_time=snapshot["avg_slot_time"],
        account=account_response(account) if account else None,
        click_state=click_state_response(snapshot["click_state"]),
        computed_points=_dec(snapshot["computed_points"]),
        computed_clicks=_dec(snapshot["computed_clicks"]),
        leaderboard=leaderboard_response(leaderboard) if leaderboard is not None else None,
        config=config_response(config) if config is not None else None,
        errors=snapshot["errors"],
    )


def click_result_response(result: ClickResult) -> ClickResultResponse:
    return ClickResultResponse(
        outcome=result.outcome.value,
        current=result.current,
        max=result.max,
        error=result.error,
    )


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------

def get_store(request: Request) -> PointsStore:
    """Dependency: the app-scoped store."""
    return request.app.state.store


def create_app(store: PointsStore, lifespan: Any = None) -> FastAPI:
    app = FastAPI(title="Backend Points", lifespan=lifespan)
    app.state.store = store

    @app.get("/health")
    async def health(store: PointsStore = Depends(get_store)) -> dict[str, Any]:
        return {
            "status": "ok",
            "slot_clock_ready": store.avg_slot_time is not None,
            "wallet_connected": store.wallet is not None,
            "account_loaded": store.account is not None,
        }

    @app.get("/points/state", response_model=StateResponse)
    async def get_state(store: PointsStore = Depends(get_store)) -> StateResponse:
        return state_response(store.snapshot())

    @app.get("/points/account", response_model=AccountResponse)
    async def get_account(store: PointsStore = Depends(get_store)) -> AccountResponse:
        if store.account is None:
            raise HTTPException(status_code=404, detail="No points account loaded")
        return account_response(store.account)

    @app.get("/points/leaderboard", response_model=list[LeaderboardEntryResponse])
    async def get_leaderboard(store: PointsStore = Depends(get_store)) -> list[LeaderboardEntryResponse]:
        if store.leaderboard is None:
            raise HTTPException(status_code=503, detail="Leaderboard unavailable")
        return leaderboard_response(store.leaderboard)

    @app.get("/points/config", response_model=list[ConfigEntryResponse])
    async def get_config(store: PointsStore = Depends(get_store)) -> list[ConfigEntryResponse]:
        if store.config is None:
            raise HTTPException(status_code=503, detail="Points config unavailable")
        return config_response(store.config)

    @app.get("/points/breakdown", response_model=BreakdownResponse)
    async def get_breakdown(store: PointsStore = Depends(get_store)) -> BreakdownResponse:
        b = store.breakdown()
        return BreakdownResponse(
            interest=_dec(b.interest), margin=_dec(b.margin), clicks=_dec(b.clicks), misc=_dec(b.misc)
        )

    @app.post("/points/click", response_model=ClickResultResponse)
    async def post_click(store: PointsStore = Depends(get_store)) -> ClickResultResponse:
        result = await store.submit_click()
        return click_result_response(result)

    @app.put("/session/wallet", response_model=StateResponse)
    async def put_wallet(body: WalletRequest, store: PointsStore = Depends(get_store)) -> StateResponse:
        try:
            await store.connect_wallet(body.wallet)
        except InvalidWalletError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return await get_state(store)

    @app.delete("/session/wallet", response_model=StateResponse)
    async def delete_wallet(store: PointsStore = Depends(get_store)) -> StateResponse:
        store.disconnect_wallet()
        return await get_state(store)

    return app
