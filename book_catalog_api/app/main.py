"""
Main entrypoint for the Book Catalog.

This module assembles the FastAPI application, sets up logging and
includes the JSON API and HTML routers.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``, e.g.::

    uvicorn book_catalog_api.app.main:app --port 3030

Connecting to MongoDB, provisioning the collection and seeding happen
in the startup handler, so importing this module never touches the
network.  Tests pass their own ``Settings`` and an in-memory client to
``create_app``.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from pymongo import MongoClient

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.db import connect, ensure_collection, ensure_indexes
from .core.errors import register_exception_handlers
from .core.logging_config import log_requests, setup_logging
from .services.seed_service import SeedService
from .views.pages import STATIC_DIR, router as pages_router


def create_app(config: Optional[Settings] = None, client: Optional[MongoClient] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use instead of the ones read from the environment.
    client : Optional[MongoClient]
        Already constructed client.  When omitted, the startup handler
        connects to ``config.database_uri`` and the shutdown handler
        closes that connection again.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or settings
    # Initialise logging before anything else so that the startup
    # handler can safely log messages.
    setup_logging(config)
    logger = logging.getLogger(__name__)

    app = FastAPI(title=config.project_name, version=config.api_version, debug=config.debug)
    app.state.settings = config
    app.state.client = client
    app.state.collection = None

    register_exception_handlers(app)
    app.middleware("http")(log_requests)

    app.include_router(api_router, prefix="/api")
    app.include_router(pages_router, tags=["pages"])
    css_dir = STATIC_DIR / "css"
    if css_dir.exists():
        app.mount("/css", StaticFiles(directory=str(css_dir)), name="css")

    owns_client = client is None

    @app.on_event("startup")
    def startup_event() -> None:
        if app.state.client is None:
            app.state.client = connect(config)
        try:
            collection = ensure_collection(
                app.state.client,
                config.database_name,
                config.collection_name,
                config.store_timeout,
            )
            if config.unique_index:
                ensure_indexes(collection, config.store_timeout)
            if config.seed_on_startup:
                SeedService.ensure_seeded(collection, timeout=config.store_timeout)
        except Exception as exc:
            logger.critical("Refusing to start: %s", getattr(exc, "message", exc))
            # Shutdown handlers do not run after a failed startup.
            if owns_client:
                app.state.client.close()
                app.state.client = None
            raise
        app.state.collection = collection

    @app.on_event("shutdown")
    def shutdown_event() -> None:
        if owns_client and app.state.client is not None:
            app.state.client.close()
            app.state.client = None

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
