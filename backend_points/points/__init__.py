"""
Points core: models, normalization, sync, accrual, click claim and ranking.
"""

from backend_points.points.breakdown import PointsBreakdown, compute_breakdown
from backend_points.points.click import ClickClaim
from backend_points.points.models import (
    Adjustments,
    ClickOutcome,
    ClickResult,
    ClickState,
    ClickStatus,
    LeaderboardEntry,
    PointsAccount,
    PointsConfigEntry,
)
from backend_points.points.normalizer import normalize_account, reduce_adjustments
from backend_points.points.ranker import rank_leaderboard
from backend_points.points.simulator import AccrualSimulator
from backend_points.points.syncer import AccountSyncer, SyncResult

__all__ = [
    "AccountSyncer",
    "AccrualSimulator",
    "Adjustments",
    "ClickClaim",
    "ClickOutcome",
    "ClickResult",
    "ClickState",
    "ClickStatus",
    "LeaderboardEntry",
    "PointsAccount",
    "PointsBreakdown",
    "PointsConfigEntry",
    "SyncResult",
    "compute_breakdown",
    "normalize_account",
    "rank_leaderboard",
    "reduce_adjustments",
]
