"""
ClickClaim — optimistic state machine for the daily click reward.

    unclicked | clicked --submit--> requested --success--> clicked
                                              --!success-> maxed
                                              --failure--> unclicked (with error)

clicked and maxed live for one tick: the accrual tick consumes them and
resets to unclicked. A successful click credits nothing here; the +1 is
applied by the tick that observes clicked.
"""

from __future__ import annotations

from backend_points.core.exceptions import NetworkFailure
from backend_points.points.models import ClickOutcome, ClickResult, ClickState, ClickStatus
from backend_points.points.normalizer import parse_click_response
from backend_points.points_api import PointsApiClient
from backend_points.points_logging import get_logger, short_wallet

logger = get_logger(__name__)

_SUBMITTABLE = frozenset({ClickStatus.UNCLICKED, ClickStatus.CLICKED})


class ClickClaim:
    def __init__(self, api: PointsApiClient) -> None:
        self._api = api
        self._state = ClickState()
        self._epoch = 0

    @property
    def state(self) -> ClickState:
        return self._state

    def _set(self, status: ClickStatus, current: int | None = None, maximum: int | None = None) -> None:
        self._state = ClickState(status=status, current=current, max=maximum)
        logger.debug("click_state_changed", status=status.value, current=current, max=maximum)

    async def submit(self, wallet: str | None) -> ClickResult:
        """Submit one click for wallet. Never raises on network failure."""
        prev = self._state
        if not wallet:
            return ClickResult(ClickOutcome.REJECTED, prev.current, prev.max, "wallet not connected")
        if prev.status == ClickStatus.MAXED:
            return ClickResult(ClickOutcome.REJECTED, prev.current, prev.max, "daily click limit reached")
        if prev.status not in _SUBMITTABLE:
            return ClickResult(ClickOutcome.REJECTED, prev.current, prev.max, "click already in flight")

        epoch = self._epoch
        self._set(ClickStatus.REQUESTED, prev.current, prev.max)
        try:
            current, maximum, success = parse_click_response(await self._api.click(wallet))
        except NetworkFailure as e:
            if epoch != self._epoch:
                return ClickResult(ClickOutcome.SUPERSEDED, error=e.reason)
            self._set(ClickStatus.UNCLICKED, prev.current, prev.max)
            logger.warning(
                "click_failed",
                wallet_id=short_wallet(wallet),
                endpoint=e.endpoint,
                error=e.reason,
            )
            return ClickResult(ClickOutcome.FAILED, prev.current, prev.max, e.reason)

        if epoch != self._epoch:
            logger.info("click_result_discarded", wallet_id=short_wallet(wallet))
            return ClickResult(ClickOutcome.SUPERSEDED, current, maximum)
        if success:
            self._set(ClickStatus.CLICKED, current, maximum)
            logger.info("click_accepted", wallet_id=short_wallet(wallet), current=current, max=maximum)
            return ClickResult(ClickOutcome.CLICKED, current, maximum)
        self._set(ClickStatus.MAXED, current, maximum)
        logger.info("click_maxed", wallet_id=short_wallet(wallet), current=current, max=maximum)
        return ClickResult(ClickOutcome.MAXED, current, maximum)

    def consume(self) -> ClickStatus:
        """
        Called once per accrual tick. Returns the status seen by the tick and
        resets clicked/maxed to unclicked. requested is left untouched.
        """
        seen = self._state.status
        # Unlike a reset of every non-unclicked status, requested survives the
        # tick: only the in-flight response may move it to clicked or maxed.
        if seen in (ClickStatus.CLICKED, ClickStatus.MAXED):
            self._set(ClickStatus.UNCLICKED, self._state.current, self._state.max)
        return seen

    def on_sync(self) -> None:
        """A fresh sync already includes a confirmed click; drop the pending +1."""
        if self._state.status == ClickStatus.CLICKED:
            self._set(ClickStatus.UNCLICKED, self._state.current, self._state.max)

    def reset(self) -> None:
        """Wallet changed or disconnected: clear state and orphan any in-flight request."""
        self._epoch += 1
        self._state = ClickState()
