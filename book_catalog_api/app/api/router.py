"""
Top‑level router for the JSON API.

This router aggregates the domain routers under the ``/api`` prefix
applied in ``main.create_app``.  When new endpoints are added, include
their routers here.
"""

from fastapi import APIRouter

from .endpoints import books, health

router = APIRouter()

router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(health.router, prefix="/health", tags=["health"])
