"""
PointsStore — single state-owning component for a points session.

Owns the published account, leaderboard, config, click state and the
simulator's derived values. Mutated only through its actions:
connect_wallet / disconnect_wallet / set_current_slot / sync / tick /
submit_click. Listeners registered with subscribe() are called after every
state change.

Wallet changes bump a generation counter; a sync or click that started
under an older generation is discarded on arrival instead of committed.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any, Callable

from backend_points.config.settings import DEFAULT_MAX_SLOT_TIME_SEC, DEFAULT_MIN_SLOT_TIME_SEC
from backend_points.points import (
    AccountSyncer,
    AccrualSimulator,
    ClickClaim,
    ClickResult,
    ClickState,
    LeaderboardEntry,
    PointsAccount,
    PointsBreakdown,
    PointsConfigEntry,
    SyncResult,
    compute_breakdown,
    rank_leaderboard,
)
from backend_points.points_api import PointsApiClient
from backend_points.points_logging import get_logger, short_wallet
from backend_points.slot_clock import SlotClock, clamp_slot_time
from backend_points.store.scheduler import SleepFn, TickScheduler
from backend_points.utils.wallet_utils import require_wallet

logger = get_logger(__name__)

Listener = Callable[["PointsStore"], None]


class PointsStore:
    def __init__(
        self,
        api: PointsApiClient,
        slot_clock: SlotClock,
        *,
        min_slot_time_sec: float = DEFAULT_MIN_SLOT_TIME_SEC,
        max_slot_time_sec: float = DEFAULT_MAX_SLOT_TIME_SEC,
        sync_interval_sec: float = 0.0,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._slot_clock = slot_clock
        self._syncer = AccountSyncer(api)
        self._click = ClickClaim(api)
        self._simulator = AccrualSimulator()
        self._min_slot_time = min_slot_time_sec
        self._max_slot_time = max_slot_time_sec
        self._sync_interval = sync_interval_sec

        self._wallet: str | None = None
        self._generation = 0
        self._current_slot: int | None = None
        self._avg_slot_time: float | None = None
        self._account: PointsAccount | None = None
        self._ranked: list[LeaderboardEntry] | None = None
        self._config: list[PointsConfigEntry] | None = None
        self._last_errors: dict[str, str] = {}

        self._running = False
        self._sync_lock = asyncio.Lock()
        self._listeners: list[Listener] = []
        self._ticker = TickScheduler(self.tick, sleep=sleep, name="accrual")
        self._resyncer = TickScheduler(self._periodic_sync, sleep=sleep, name="resync")

    # ------------------------------------------------------------------
    # Observables
    # ------------------------------------------------------------------

    @property
    def wallet(self) -> str | None:
        return self._wallet

    @property
    def current_slot(self) -> int | None:
        return self._current_slot

    @property
    def avg_slot_time(self) -> float | None:
        """Raw slot time estimate in seconds; None while unknown."""
        return self._avg_slot_time

    @property
    def tick_interval(self) -> float | None:
        if self._avg_slot_time is None:
            return None
        return clamp_slot_time(self._avg_slot_time, self._min_slot_time, self._max_slot_time)

    @property
    def account(self) -> PointsAccount | None:
        return self._account

    @property
    def click_state(self) -> ClickState:
        return self._click.state

    @property
    def computed_points(self) -> Decimal | None:
        return self._simulator.computed_points(self._account)

    @property
    def computed_clicks(self) -> Decimal | None:
        return self._simulator.computed_clicks(self._account)

    @property
    def leaderboard(self) -> list[LeaderboardEntry] | None:
        return self._ranked

    @property
    def config(self) -> list[PointsConfigEntry] | None:
        return self._config

    @property
    def last_errors(self) -> dict[str, str]:
        """Endpoints that failed on the last sync, with reasons."""
        return dict(self._last_errors)

    def breakdown(self) -> PointsBreakdown:
        return compute_breakdown(self._account, self.computed_points, self.computed_clicks)

    def snapshot(self) -> dict[str, Any]:
        return {
            "wallet": self._wallet,
            "current_slot": self._current_slot,
            "avg_slot_time": self._avg_slot_time,
            "account": self._account,
            "click_state": self.click_state,
            "computed_points": self.computed_points,
            "computed_clicks": self.computed_clicks,
            "leaderboard": self._ranked,
            "config": self._config,
            "errors": self.last_errors,
        }

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.exception("store_listener_failed", error=str(e))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def connect_wallet(self, wallet: str) -> None:
        """Switch to wallet; clears the previous wallet's state and syncs when possible."""
        wallet = require_wallet(wallet)
        if wallet == self._wallet:
            return
        self._clear_wallet_state()
        self._wallet = wallet
        self._reschedule_ticks()
        logger.info("wallet_connected", wallet_id=short_wallet(wallet))
        self._notify()
        if self._can_sync():
            await self.sync()

    def disconnect_wallet(self) -> None:
        if self._wallet is None and self._account is None:
            return
        logger.info("wallet_disconnected", wallet_id=short_wallet(self._wallet))
        self._clear_wallet_state()
        self._wallet = None
        self._reschedule_ticks()
        self._notify()

    def _clear_wallet_state(self) -> None:
        self._generation += 1
        self._account = None
        self._simulator.reset()
        self._click.reset()

    async def set_current_slot(self, slot: int) -> None:
        """Record the current slot; refresh the slot clock when it moved materially."""
        self._current_slot = slot
        if not self._slot_clock.needs_recompute(slot):
            return
        previous = self._avg_slot_time
        estimate = await self._slot_clock.refresh(slot)
        if estimate is None or estimate == previous:
            return
        self._avg_slot_time = estimate
        logger.info("slot_time_updated", slot=slot, avg_slot_time_sec=estimate, tick_interval_sec=self.tick_interval)
        self._reschedule_ticks()
        self._notify()
        if previous is None:
            await self.sync()

    def _can_sync(self) -> bool:
        return self._avg_slot_time is not None and self._current_slot is not None

    async def sync(self) -> SyncResult | None:
        """
        Run one sync pass and commit it. Returns None when the slot clock is
        not ready yet or the wallet changed while the pass was in flight.
        """
        if not self._can_sync():
            logger.debug("sync_skipped_not_ready", wallet_id=short_wallet(self._wallet))
            return None
        async with self._sync_lock:
            generation = self._generation
            wallet = self._wallet
            result = await self._syncer.sync(wallet, self._current_slot, self._avg_slot_time)
            if generation != self._generation:
                logger.info("sync_discarded_superseded", wallet_id=short_wallet(wallet))
                return None
            self._commit(result)
        return result

    def _commit(self, result: SyncResult) -> None:
        if result.leaderboard is not None:
            self._ranked = rank_leaderboard(result.leaderboard)
        if result.config is not None:
            self._config = result.config
        if result.account is not None:
            self._account = result.account
            self._simulator.reset(click_seed=result.click_seed)
            self._click.on_sync()
        self._last_errors = dict(result.errors)
        self._reschedule_ticks()
        self._notify()

    def tick(self) -> Decimal | None:
        """One accrual step; no-op without a loaded account."""
        if self._account is None:
            return None
        points = self._simulator.tick(self._account, self._click)
        self._notify()
        return points

    async def submit_click(self) -> ClickResult:
        """Submit a click for the connected wallet; see ClickClaim for outcomes."""
        result = await self._click.submit(self._wallet)
        self._notify()
        return result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        self._running = True
        self._reschedule_ticks()
        if self._sync_interval > 0:
            self._resyncer.reschedule(self._sync_interval)
        logger.info("points_store_started", sync_interval_sec=self._sync_interval)

    async def stop(self) -> None:
        self._running = False
        await self._ticker.stop()
        await self._resyncer.stop()
        logger.info("points_store_stopped")

    def _reschedule_ticks(self) -> None:
        """Tick only while running with a known slot time and a loaded account."""
        interval = self.tick_interval if self._running and self._account is not None else None
        self._ticker.reschedule(interval)

    async def _periodic_sync(self) -> None:
        await self.sync()
