"""
Server-rendered pages.

Each page fetches the view projection of all books and hands it to a
Jinja2 template.  Templates are rendered only when the listing
succeeded; a store failure is answered by the JSON error handler
instead.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pymongo.collection import Collection

from book_catalog_api.app.core.db import get_collection, get_store_timeout
from book_catalog_api.app.schemas.book import Projection
from book_catalog_api.app.services.book_service import BookService

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def _render_books(request: Request, template: str, collection: Collection) -> HTMLResponse:
    books = BookService.list_books(collection, Projection.VIEW, get_store_timeout(request))
    return templates.TemplateResponse(
        request,
        template,
        {"books": [book.as_context() for book in books]},
    )


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {})


@router.get("/books", response_class=HTMLResponse)
def book_table(request: Request, collection: Collection = Depends(get_collection)) -> HTMLResponse:
    return _render_books(request, "book-table.html", collection)


@router.get("/authors", response_class=HTMLResponse)
def author_table(request: Request, collection: Collection = Depends(get_collection)) -> HTMLResponse:
    return _render_books(request, "author-table.html", collection)


@router.get("/years", response_class=HTMLResponse)
def year_table(request: Request, collection: Collection = Depends(get_collection)) -> HTMLResponse:
    return _render_books(request, "year-table.html", collection)


@router.get("/search", response_class=HTMLResponse)
def search_bar(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "search-bar.html", {})


@router.get("/create", status_code=status.HTTP_204_NO_CONTENT)
def create_placeholder() -> Response:
    # The creation form is served by the front-end; nothing to render yet.
    return Response(status_code=status.HTTP_204_NO_CONTENT)
