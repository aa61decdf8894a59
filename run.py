"""Entry point for serving the Expense Tracker API.

Starts uvicorn with the application defined in
``expense_tracker_api.app.main``.  Host and port come from the
``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0`` and
``5000``); the rest of the configuration is read by
``expense_tracker_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from expense_tracker_api.app.core.config import settings
from expense_tracker_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()
