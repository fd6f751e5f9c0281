"""
Logging for the catalog service.

``setup_logging`` configures the root logger from ``Settings``: the
level, an optional mirror file and whether the per-request access log
is emitted.  ``log_requests`` is the HTTP middleware writing that
access log to the ``book_catalog_api.access`` logger.
"""

import logging
import time
from pathlib import Path

from fastapi import Request

from .config import Settings


ACCESS_LOGGER = "book_catalog_api.access"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(config: Settings) -> None:
    """Configure logging from the catalog settings.

    Handlers are attached only once; the root logger keeps whatever
    handlers pytest or an earlier ``create_app`` call installed.  The
    level and the access log switch are applied every time.
    """
    root = logging.getLogger()
    if not root.handlers:
        handlers = [logging.StreamHandler()]
        if config.log_file:
            handlers.append(logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8"))
        logging.basicConfig(format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", handlers=handlers)

    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    logging.getLogger(ACCESS_LOGGER).disabled = not config.access_log
    # The driver logs every heartbeat at DEBUG.
    logging.getLogger("pymongo").setLevel(max(root.level, logging.INFO))


async def log_requests(request: Request, call_next):
    """HTTP middleware logging one line per handled request."""
    logger = logging.getLogger(ACCESS_LOGGER)
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
