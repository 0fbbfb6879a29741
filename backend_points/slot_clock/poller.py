"""
SlotPoller — feeds the current slot to a callback at a fixed cadence.

Polling loop in the style of a 24/7 listener: one getSlot per cycle, errors
logged and the loop continues, stop() exits after the current cycle.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from backend_points.core.exceptions import RpcError
from backend_points.points_logging import get_logger
from backend_points.solana_rpc import SolanaRpcClient

logger = get_logger(__name__)


class SlotPoller:
    def __init__(
        self,
        rpc: SolanaRpcClient,
        on_slot: Callable[[int], Awaitable[None]],
        *,
        poll_interval_sec: float = 10.0,
    ) -> None:
        if poll_interval_sec <= 0:
            raise ValueError("poll_interval_sec must be positive")
        self._rpc = rpc
        self._on_slot = on_slot
        self._poll_interval_sec = poll_interval_sec
        self._stop_event = asyncio.Event()

    async def poll_once(self) -> int | None:
        try:
            slot = await self._rpc.get_slot()
        except RpcError as e:
            logger.warning("slot_poll_failed", error=str(e))
            return None
        await self._on_slot(slot)
        return slot

    async def run(self) -> None:
        logger.info("slot_poller_started", poll_interval_sec=self._poll_interval_sec)
        while not self._stop_event.is_set():
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.exception("slot_poll_cycle_error", error=str(e))
            if self._stop_event.is_set():
                break
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._poll_interval_sec)
            except asyncio.TimeoutError:
                pass
        logger.info("slot_poller_stopped")

    def stop(self) -> None:
        self._stop_event.set()
