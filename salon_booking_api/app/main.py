"""
Main entrypoint for the Salon Booking API.

This module assembles the FastAPI application: logging, CORS, error
handlers and the routers.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app``, so
it can be served with uvicorn or another ASGI server, e.g.::

    uvicorn salon_booking_api.app.main:app --reload

The database and the external clients are created in the lifespan
handler and kept on ``app.state`` (see ``api.dependencies``).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router
from .core.config import Settings, settings
from .core.db import Database
from .core.errors import register_error_handlers
from .core.logging_config import setup_logging
from .integrations import Integrations, build_integrations

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None, integrations: Optional[Integrations] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to use instead of the ones read from the environment.
    integrations:
        Pre‑built provider clients.  When omitted they are built from
        the settings at startup and closed at shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(app_settings.log_level, app_settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = Database(app_settings.database_url)
        db.init_db(seed_demo_services=app_settings.seed_demo_services)
        app.state.db = db

        owned = integrations is None
        app.state.integrations = build_integrations(app_settings) if owned else integrations
        logger.info("%s %s started, database at %s", app_settings.project_name, app_settings.api_version, db.path)
        try:
            yield
        finally:
            if owned:
                await app.state.integrations.aclose()

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, lifespan=lifespan)
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
