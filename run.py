"""Entry point for the Book Catalog web server.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example inside the
Docker image, where only a single Python file needs to be specified.

Configuration is read from environment variables; ``DATABASE_URI`` is
required, ``HOST`` and ``PORT`` default to ``0.0.0.0`` and ``3030``.

Usage:
    DATABASE_URI=mongodb://localhost:27017 python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from book_catalog_api.app.core.config import settings
from book_catalog_api.app.main import app


async def run_server() -> bool:
    """Serve the catalog until interrupted.

    Returns ``False`` when the application failed to start, for
    example because the store was unreachable or the seed data is
    corrupted.
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
    return server.started


def main() -> None:
    try:
        started = asyncio.run(run_server())
    except (KeyboardInterrupt, SystemExit):
        return
    if not started:
        logging.getLogger(__name__).critical("Book Catalog failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
