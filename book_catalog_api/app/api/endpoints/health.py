"""
Health endpoint.

Reports the application name and version after checking that MongoDB
still answers a ``ping``.  A failing ping is rendered as 503 by the
``StoreUnavailable`` handler.
"""

from typing import Any, Dict

from fastapi import APIRouter, Request

from book_catalog_api.app.core.db import ping

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
def get_health(request: Request) -> Dict[str, Any]:
    config = request.app.state.settings
    ping(request.app.state.client, config.store_timeout)
    return {"status": "ok", "project": config.project_name, "version": config.api_version}
