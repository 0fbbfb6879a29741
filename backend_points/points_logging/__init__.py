"""
Structured logging for Backend Points.

JSON logs with timestamp, event_type, wallet_id and per-event context.
Use get_logger() in all modules.
"""

from backend_points.points_logging.logger import (
    bind_wallet,
    configure_structlog,
    get_logger,
    short_wallet,
)

__all__ = ["bind_wallet", "configure_structlog", "get_logger", "short_wallet"]
