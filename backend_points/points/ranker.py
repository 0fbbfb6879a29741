"""
LeaderboardRanker — display ranking with directional change indicators.

Sorted by quantity descending, ties broken by wallet ascending so the order
is deterministic. rank_delta = (sorted_rank − server_rank) + server_rank_delta:
positive means the entry dropped, negative means it rose.
"""

from __future__ import annotations

from typing import Iterable

from backend_points.points.models import LeaderboardEntry, PointsAccount


def rank_leaderboard(accounts: Iterable[PointsAccount]) -> list[LeaderboardEntry]:
    ordered = sorted(accounts, key=lambda a: (-a.quantity, a.wallet))
    return [
        LeaderboardEntry(
            account=a,
            sorted_rank=i + 1,
            rank_delta=(i + 1 - a.rank) + a.rank_delta,
        )
        for i, a in enumerate(ordered)
    ]


def direction(entry: LeaderboardEntry) -> str:
    """'up', 'down' or 'same' from the sign of rank_delta."""
    if entry.rank_delta < 0:
        return "up"
    if entry.rank_delta > 0:
        return "down"
    return "same"
