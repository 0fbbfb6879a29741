"""
REST client for the remote points service (/points endpoints).
"""

from backend_points.points_api.client import (
    ADJUSTMENTS_PATH,
    CLICK_PATH,
    CONFIG_PATH,
    LEADERBOARD_PATH,
    POINTS_PATH,
    PointsApiClient,
)

__all__ = [
    "ADJUSTMENTS_PATH",
    "CLICK_PATH",
    "CONFIG_PATH",
    "LEADERBOARD_PATH",
    "POINTS_PATH",
    "PointsApiClient",
]
