"""
Application settings.

Typed, immutable view over env.py used by the clients, the store and the
API server. Call get_settings() once at startup and pass the object down.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from backend_points.config import env

DEFAULT_HTTP_TIMEOUT_SEC = 15.0
DEFAULT_SLOT_SAMPLE_OFFSET = 5_000_000
DEFAULT_SLOT_SAMPLE_WINDOW = 5
DEFAULT_MIN_SLOT_TIME_SEC = 0.1
DEFAULT_MAX_SLOT_TIME_SEC = 10.0
DEFAULT_SLOT_RECOMPUTE_THRESHOLD = 9000  # ~1h of slots
DEFAULT_SLOT_POLL_INTERVAL_SEC = 10.0
DEFAULT_SYNC_INTERVAL_SEC = 60.0


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration.

    sync_interval_sec: periodic re-sync cadence; 0 disables periodic re-sync.
    min_slot_time_sec / max_slot_time_sec: clamp for the tick interval.
    """

    points_api_host: str = env.DEFAULT_POINTS_API_HOST
    solana_rpc_urls: tuple[str, ...] = field(default_factory=lambda: (env.MAINNET_RPC_URL,))
    http_timeout_sec: float = DEFAULT_HTTP_TIMEOUT_SEC
    slot_sample_offset: int = DEFAULT_SLOT_SAMPLE_OFFSET
    slot_sample_window: int = DEFAULT_SLOT_SAMPLE_WINDOW
    min_slot_time_sec: float = DEFAULT_MIN_SLOT_TIME_SEC
    max_slot_time_sec: float = DEFAULT_MAX_SLOT_TIME_SEC
    slot_recompute_threshold: int = DEFAULT_SLOT_RECOMPUTE_THRESHOLD
    slot_poll_interval_sec: float = DEFAULT_SLOT_POLL_INTERVAL_SEC
    sync_interval_sec: float = DEFAULT_SYNC_INTERVAL_SEC
    wallet: str | None = None
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.solana_rpc_urls:
            raise ValueError("solana_rpc_urls must be non-empty")
        if self.http_timeout_sec <= 0:
            raise ValueError("http_timeout_sec must be positive")
        if self.slot_sample_offset <= 0 or self.slot_sample_window < 0:
            raise ValueError("slot sample offset must be positive and window non-negative")
        if not (0 < self.min_slot_time_sec <= self.max_slot_time_sec):
            raise ValueError("min_slot_time_sec must be positive and <= max_slot_time_sec")
        if self.slot_poll_interval_sec <= 0:
            raise ValueError("slot_poll_interval_sec must be positive")
        if self.sync_interval_sec < 0:
            raise ValueError("sync_interval_sec must be >= 0")


def get_settings() -> Settings:
    """Build Settings from environment variables (and .env)."""
    env.load_points_env()
    return Settings(
        points_api_host=env.get_points_api_host(),
        solana_rpc_urls=tuple(env.get_solana_rpc_urls()),
        http_timeout_sec=env.get_float("HTTP_TIMEOUT_SEC", DEFAULT_HTTP_TIMEOUT_SEC),
        slot_sample_offset=env.get_int("SLOT_SAMPLE_OFFSET", DEFAULT_SLOT_SAMPLE_OFFSET),
        slot_sample_window=env.get_int("SLOT_SAMPLE_WINDOW", DEFAULT_SLOT_SAMPLE_WINDOW),
        min_slot_time_sec=env.get_float("MIN_SLOT_TIME_SEC", DEFAULT_MIN_SLOT_TIME_SEC),
        max_slot_time_sec=env.get_float("MAX_SLOT_TIME_SEC", DEFAULT_MAX_SLOT_TIME_SEC),
        slot_recompute_threshold=env.get_int("SLOT_RECOMPUTE_THRESHOLD", DEFAULT_SLOT_RECOMPUTE_THRESHOLD),
        slot_poll_interval_sec=env.get_float("SLOT_POLL_INTERVAL_SEC", DEFAULT_SLOT_POLL_INTERVAL_SEC),
        sync_interval_sec=env.get_float("SYNC_INTERVAL_SEC", DEFAULT_SYNC_INTERVAL_SEC),
        wallet=env.get_str("WALLET") or None,
        api_host=env.get_str("API_HOST", "0.0.0.0"),
        api_port=env.get_int("API_PORT", 8000),
        log_level=env.get_str("LOG_LEVEL", "INFO").upper(),
    )
