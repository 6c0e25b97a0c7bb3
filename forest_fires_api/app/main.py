"""
Main entrypoint for the Forest Fires API.

This module assembles the FastAPI application, sets up logging,
enables CORS, registers the error handlers and includes versioned
routers.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``, e.g.::

    uvicorn forest_fires_api.app.main:app --reload

The record store and the proxy service are created on startup, kept on
``app.state`` for the request dependencies in ``api.deps`` and closed
on shutdown.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import RAW_PROXY_ROUTES, Settings, settings as default_settings
from .core.db import ForestFireStore
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .services.proxy_service import ProxyService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the process‑wide settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings

    if settings.cors_enabled and settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        app.state.store = ForestFireStore(settings.database_url)
        app.state.proxy_service = ProxyService(
            settings.proxy_upstreams,
            raw_routes=list(RAW_PROXY_ROUTES),
            timeout=settings.proxy_timeout,
        )
        logger.info("%s started", settings.project_name)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.proxy_service.close()
        app.state.store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
