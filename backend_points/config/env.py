"""
Environment variable loading for the points engine.

- POINTS_API_HOST: base URL for the /points REST endpoints
- SOLANA_RPC_URL: primary RPC endpoint (read from .env)
- SOLANA_RPC_FALLBACK_URLS: comma-separated endpoints tried after the primary
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_points/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_POINTS_API_HOST = "https://api.solend.fi"
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"


def load_points_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def get_str(name: str, default: str = "") -> str:
    load_points_env()
    return (os.getenv(name) or "").strip() or default


def get_float(name: str, default: float) -> float:
    """Float env var; unparseable values fall back to default."""
    raw = get_str(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_int(name: str, default: int) -> int:
    raw = get_str(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_points_api_host() -> str:
    """Return POINTS_API_HOST without trailing slash."""
    return get_str("POINTS_API_HOST", DEFAULT_POINTS_API_HOST).rstrip("/")


def get_solana_rpc_urls() -> list[str]:
    """
    Resolve RPC endpoints in failover order.
    Order: SOLANA_RPC_URL, then SOLANA_RPC_FALLBACK_URLS, else mainnet default.
    """
    urls: list[str] = []
    primary = get_str("SOLANA_RPC_URL")
    if primary:
        urls.append(primary)
    for u in get_str("SOLANA_RPC_FALLBACK_URLS").split(","):
        u = u.strip()
        if u and u not in urls:
            urls.append(u)
    return urls or [MAINNET_RPC_URL]


def mask_rpc_url(url: str) -> str:
    """Mask API key in URL if present."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url
