"""
AccountSyncer — fetch and merge authoritative points data.

One sync pass fetches the leaderboard, the config and (with a wallet) the
wallet's account plus its adjustment history. The three are independent
failure domains: a failure yields None for that part and an entry in
SyncResult.errors, never an exception. The wallet's account is committed
only when both of its fetches succeed.
"""

from __future__ import annotations

import asyncio
import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal

from backend_points.core.exceptions import NetworkFailure
from backend_points.points.models import PointsAccount, PointsConfigEntry
from backend_points.points.normalizer import (
    normalize_account,
    parse_config,
    reduce_adjustments,
)
from backend_points.points_api import (
    ADJUSTMENTS_PATH,
    CONFIG_PATH,
    LEADERBOARD_PATH,
    POINTS_PATH,
    PointsApiClient,
)
from backend_points.points_logging import get_logger, short_wallet

logger = get_logger(__name__)


@dataclass
class SyncResult:
    wallet: str | None
    current_slot: int
    leaderboard: list[PointsAccount] | None = None
    config: list[PointsConfigEntry] | None = None
    account: PointsAccount | None = None
    click_seed: Decimal | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def project_quantity(account: PointsAccount, current_slot: int) -> Decimal:
    """
    Project the snapshot forward to current_slot:
    quantity + points_per_slot × (current_slot − snapshot_slot).
    Missing snapshot slot or a node behind the snapshot projects nothing.
    """
    if account.snapshot_slot is None:
        return account.quantity
    elapsed = max(current_slot - account.snapshot_slot, 0)
    return account.quantity + account.points_per_slot * elapsed


class AccountSyncer:
    def __init__(self, api: PointsApiClient) -> None:
        self._api = api

    async def sync(
        self,
        wallet: str | None,
        current_slot: int,
        avg_slot_time_sec: float,
    ) -> SyncResult:
        if avg_slot_time_sec <= 0:
            raise ValueError("avg_slot_time_sec must be positive")
        result = SyncResult(wallet=wallet, current_slot=current_slot)
        tasks = [
            self._sync_leaderboard(result, avg_slot_time_sec),
            self._sync_config(result),
        ]
        if wallet:
            tasks.append(self._sync_account(result, wallet, current_slot, avg_slot_time_sec))
        await asyncio.gather(*tasks)
        logger.info(
            "points_sync_finished",
            wallet_id=short_wallet(wallet),
            slot=current_slot,
            leaderboard_size=len(result.leaderboard) if result.leaderboard is not None else None,
            account_loaded=result.account is not None,
            errors=result.errors or None,
        )
        return result

    async def _sync_leaderboard(self, result: SyncResult, avg_slot_time_sec: float) -> None:
        try:
            raw = await self._api.get_leaderboard()
            if not isinstance(raw, list):
                raise NetworkFailure(LEADERBOARD_PATH, "expected a list")
            result.leaderboard = [
                normalize_account(r, avg_slot_time_sec, LEADERBOARD_PATH) for r in raw
            ]
        except NetworkFailure as e:
            self._record_failure(result, LEADERBOARD_PATH, e)

    async def _sync_config(self, result: SyncResult) -> None:
        try:
            result.config = parse_config(await self._api.get_config())
        except NetworkFailure as e:
            self._record_failure(result, CONFIG_PATH, e)

    async def _sync_account(
        self,
        result: SyncResult,
        wallet: str,
        current_slot: int,
        avg_slot_time_sec: float,
    ) -> None:
        try:
            raw = await self._api.get_account(wallet)
            account = normalize_account(raw, avg_slot_time_sec, POINTS_PATH)
        except NetworkFailure as e:
            self._record_failure(result, POINTS_PATH, e)
            return
        try:
            adjustments = reduce_adjustments(await self._api.get_adjustments(wallet))
        except NetworkFailure as e:
            self._record_failure(result, ADJUSTMENTS_PATH, e)
            return
        result.account = dataclasses.replace(
            account,
            quantity=project_quantity(account, current_slot),
            adjustments=adjustments,
        )
        result.click_seed = adjustments.click

    @staticmethod
    def _record_failure(result: SyncResult, endpoint: str, error: NetworkFailure) -> None:
        result.errors[endpoint] = error.reason
        logger.warning(
            "points_fetch_failed",
            endpoint=endpoint,
            wallet_id=short_wallet(result.wallet),
            error=error.reason,
        )
