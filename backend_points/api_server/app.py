"""
Production app: wires settings → clients → slot clock → store → routes.

Run: uvicorn backend_points.api_server.app:app --host 0.0.0.0 --port 8000
The lifespan starts the store's schedulers and the slot poller, connects
WALLET from env when set, and closes the HTTP clients on shutdown.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend_points.api_server.server import create_app
from backend_points.config import Settings, get_settings
from backend_points.core.exceptions import InvalidWalletError
from backend_points.points_api import PointsApiClient
from backend_points.points_logging import get_logger
from backend_points.slot_clock import SlotClock, SlotPoller
from backend_points.solana_rpc import SolanaRpcClient
from backend_points.store import PointsStore

logger = get_logger(__name__)


def build_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    rpc = SolanaRpcClient(settings.solana_rpc_urls, timeout_sec=settings.http_timeout_sec)
    api = PointsApiClient(settings.points_api_host, timeout_sec=settings.http_timeout_sec)
    slot_clock = SlotClock(
        rpc,
        sample_offset=settings.slot_sample_offset,
        sample_window=settings.slot_sample_window,
        recompute_threshold=settings.slot_recompute_threshold,
    )
    store = PointsStore(
        api,
        slot_clock,
        min_slot_time_sec=settings.min_slot_time_sec,
        max_slot_time_sec=settings.max_slot_time_sec,
        sync_interval_sec=settings.sync_interval_sec,
    )
    poller = SlotPoller(rpc, store.set_current_slot, poll_interval_sec=settings.slot_poll_interval_sec)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.start()
        if settings.wallet:
            try:
                await store.connect_wallet(settings.wallet)
            except InvalidWalletError as e:
                logger.error("startup_wallet_invalid", error=str(e))
        poll_task = asyncio.create_task(poller.run())
        try:
            yield
        finally:
            poller.stop()
            poll_task.cancel()
            try:
                await poll_task
            except asyncio.CancelledError:
                pass
            await store.stop()
            await api.aclose()
            await rpc.aclose()

    return create_app(store, lifespan=lifespan)


app = build_app()
