"""
Main entrypoint: points engine behind the FastAPI server.

The app lifespan starts the slot poller, the accrual tick and periodic
re-sync; the server runs in the main thread. On SIGINT/SIGTERM uvicorn shuts
the lifespan down, which stops the schedulers and closes HTTP clients.

Env: POINTS_API_HOST, SOLANA_RPC_URL, WALLET, API_HOST, API_PORT, LOG_LEVEL, etc.
"""

# Configure structured JSON logging before other imports that may log
from backend_points.points_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Build the app from env settings and serve it."""
    import uvicorn

    from backend_points.api_server.app import app
    from backend_points.config import get_settings

    settings = get_settings()
    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        points_api_host=settings.points_api_host,
        wallet_configured=settings.wallet is not None,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
