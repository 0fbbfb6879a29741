"""
State store: the single owner of points session state.

Network fetches and the repeating accrual tick both write through PointsStore,
so tick-vs-fetch races resolve on one asyncio timeline.
"""

from backend_points.store.scheduler import TickScheduler
from backend_points.store.store import PointsStore

__all__ = ["PointsStore", "TickScheduler"]
