"""Per-category split of the displayed balance."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from backend_points.points.models import ZERO, PointsAccount


@dataclass(frozen=True)
class PointsBreakdown:
    interest: Decimal
    margin: Decimal
    clicks: Decimal
    misc: Decimal


def compute_breakdown(
    account: PointsAccount | None,
    computed_points: Decimal | None,
    computed_clicks: Decimal | None,
) -> PointsBreakdown:
    """
    interest = max(points + claim − clicks − margin_trade − manual, 0);
    the remaining categories come straight from the adjustment totals.
    """
    adj = account.adjustments if account is not None else None
    points = computed_points or ZERO
    clicks = computed_clicks or ZERO
    claim = adj.claim if adj else ZERO
    margin = adj.margin_trade if adj else ZERO
    manual = adj.manual if adj else ZERO
    interest = max(points + claim - clicks - margin - manual, ZERO)
    return PointsBreakdown(interest=interest, margin=margin, clicks=clicks, misc=manual)
