"""Entry point for the Salon Booking API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example on Render or in Docker,
where you only specify a single Python file to run.

Configuration such as SECRET_KEY, staff accounts and provider keys is
read from environment variables; see `.env.example` for the list of
supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from salon_booking_api.app.core.config import settings
from salon_booking_api.app.main import app


async def run_api() -> None:
    """Serve the API using Uvicorn.

    Host and port are read from the `HOST` and `PORT` environment
    variables. Defaults are `0.0.0.0` and `10000`.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


async def main() -> None:
    try:
        await run_api()
    except Exception:
        logging.exception("Exception in API server")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
