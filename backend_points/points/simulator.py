"""
AccrualSimulator — extrapolate the displayed balance between syncs.

Each tick (one per estimated slot):
    computed_points += points_per_slot (+1 if a click was confirmed)
    computed_clicks += 1 if a click was confirmed
Both values start unset and are seeded from the current account the first
time they are read. The account itself is never mutated here.
"""

from __future__ import annotations

from decimal import Decimal

from backend_points.points.click import ClickClaim
from backend_points.points.models import PointsAccount, ClickStatus
from backend_points.points_logging import get_logger

logger = get_logger(__name__)

ONE = Decimal(1)


class AccrualSimulator:
    def __init__(self) -> None:
        self._computed_points: Decimal | None = None
        self._computed_clicks: Decimal | None = None

    @property
    def is_seeded(self) -> bool:
        return self._computed_points is not None

    def computed_points(self, account: PointsAccount | None) -> Decimal | None:
        if self._computed_points is None and account is not None:
            self._computed_points = account.quantity
        return self._computed_points

    def computed_clicks(self, account: PointsAccount | None) -> Decimal | None:
        if self._computed_clicks is None and account is not None:
            self._computed_clicks = account.adjustments.click
        return self._computed_clicks

    def reset(self, click_seed: Decimal | None = None) -> None:
        """Forget derived values; a fresh sync may publish the click total as seed."""
        self._computed_points = None
        self._computed_clicks = click_seed

    def tick(self, account: PointsAccount, click: ClickClaim) -> Decimal:
        """Advance one slot against account; returns the new computed_points."""
        status = click.consume()
        clicked = status == ClickStatus.CLICKED
        points = self.computed_points(account) + account.points_per_slot
        if clicked:
            points += ONE
            self._computed_clicks = self.computed_clicks(account) + ONE
        self._computed_points = points
        if status != ClickStatus.UNCLICKED:
            logger.debug("accrual_tick_click_consumed", status=status.value, computed_points=str(points))
        return points
