"""Entry point for the BlackList RO registry API.

Starts the FastAPI application with Uvicorn.  Configuration (admin
password, public mode, signup threshold, host and port) is read from
environment variables; see ``blacklist_api/app/core/config.py`` for
the full list.

Usage:
    ADMIN_PASSWORD=secret python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from blacklist_api.app.core.config import settings
from blacklist_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("BlackList RO server listening on port %d", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
