"""
SlotClock — estimate wall-clock seconds per chain slot.

Samples a historical window far enough back to be stable
([current - offset - window, current - offset]), takes the first slot in it
that actually produced a block, and divides the elapsed wall time since that
block by the elapsed slots. None means "unknown": callers must not start
ticking on None and must never treat it as zero.
"""

from __future__ import annotations

import time
from typing import Callable

from backend_points.config.settings import (
    DEFAULT_MAX_SLOT_TIME_SEC,
    DEFAULT_MIN_SLOT_TIME_SEC,
    DEFAULT_SLOT_RECOMPUTE_THRESHOLD,
    DEFAULT_SLOT_SAMPLE_OFFSET,
    DEFAULT_SLOT_SAMPLE_WINDOW,
)
from backend_points.core.exceptions import RpcError
from backend_points.points_logging import get_logger
from backend_points.solana_rpc import SolanaRpcClient

logger = get_logger(__name__)


def clamp_slot_time(
    seconds: float,
    min_sec: float = DEFAULT_MIN_SLOT_TIME_SEC,
    max_sec: float = DEFAULT_MAX_SLOT_TIME_SEC,
) -> float:
    """Clamp a raw estimate into [min_sec, max_sec] before using it as a timer interval."""
    return max(min_sec, min(max_sec, seconds))


class SlotClock:
    """Average slot time estimator backed by getBlocks/getBlockTime."""

    def __init__(
        self,
        rpc: SolanaRpcClient,
        *,
        sample_offset: int = DEFAULT_SLOT_SAMPLE_OFFSET,
        sample_window: int = DEFAULT_SLOT_SAMPLE_WINDOW,
        recompute_threshold: int = DEFAULT_SLOT_RECOMPUTE_THRESHOLD,
        now: Callable[[], float] = time.time,
    ) -> None:
        self._rpc = rpc
        self._sample_offset = sample_offset
        self._sample_window = sample_window
        self._recompute_threshold = recompute_threshold
        self._now = now
        self._estimate: float | None = None
        self._computed_at_slot: int | None = None

    @property
    def estimate(self) -> float | None:
        """Last computed raw estimate (seconds per slot), None if unknown."""
        return self._estimate

    def sample_window(self, current_slot: int) -> tuple[int, int]:
        end = current_slot - self._sample_offset
        return end - self._sample_window, end

    async def compute_average_slot_time(self, current_slot: int) -> float | None:
        """
        Return average seconds per slot, or None when no slot in the sample
        window was produced, its block time is unavailable or not in the past,
        or the RPC failed.
        """
        start, end = self.sample_window(current_slot)
        if end <= 0:
            logger.warning("slot_clock_window_before_genesis", current_slot=current_slot)
            return None
        start = max(start, 0)
        try:
            produced = await self._rpc.get_blocks(start, end)
            if not produced:
                logger.warning("slot_clock_no_produced_slot", start=start, end=end)
                return None
            sampled_slot = min(produced)
            block_time = await self._rpc.get_block_time(sampled_slot)
        except RpcError as e:
            logger.warning("slot_clock_rpc_failed", current_slot=current_slot, error=str(e))
            return None
        if block_time is None:
            logger.warning("slot_clock_no_block_time", slot=sampled_slot)
            return None
        elapsed_slots = current_slot - sampled_slot
        if elapsed_slots <= 0:
            return None
        avg = (self._now() - block_time) / elapsed_slots
        if avg <= 0:
            # block time at or after local now: clock skew or a bad node
            logger.warning(
                "slot_clock_non_positive_estimate",
                current_slot=current_slot,
                sampled_slot=sampled_slot,
                block_time=block_time,
            )
            return None
        logger.debug(
            "slot_clock_computed",
            current_slot=current_slot,
            sampled_slot=sampled_slot,
            avg_slot_time_sec=avg,
        )
        return avg

    def needs_recompute(self, current_slot: int) -> bool:
        """True on cold start or when current_slot moved past the recompute threshold."""
        if self._estimate is None or self._computed_at_slot is None:
            return True
        return abs(current_slot - self._computed_at_slot) >= self._recompute_threshold

    async def refresh(self, current_slot: int) -> float | None:
        """Recompute if needed; return the cached estimate."""
        if not self.needs_recompute(current_slot):
            return self._estimate
        estimate = await self.compute_average_slot_time(current_slot)
        if estimate is not None:
            self._estimate = estimate
            self._computed_at_slot = current_slot
        return self._estimate
