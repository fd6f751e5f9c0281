"""Book catalog API client.

This module defines a small client wrapper around the JSON API served
by ``book_catalog_api``.  The client uses the ``requests`` library
internally and exposes one method per operation:

* :meth:`list_books` – return every stored book.
* :meth:`create_book` – store a new book.
* :meth:`update_book` – replace all fields of an existing book.
* :meth:`delete_book` – remove a book by its identifier.

Every method returns a ``(data, error)`` tuple instead of raising.  On
failure ``error`` is a dictionary with the keys ``status_code`` and
``message``; the message is taken from the ``{"message": ...}`` body
the server answers with whenever one is present.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

BOOKS_PATH = "/api/books"


class BookCatalogAPI:
    """Client for interacting with the book catalog API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3030``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each HTTP response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/books``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``message`` describing the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Book operations
    # ------------------------------------------------------------------
    def list_books(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all books.

        Returns:
            A tuple ``(books, error)``. ``books`` is empty on failure.
        """
        data, error = self._request("GET", BOOKS_PATH)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def create_book(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Create a book.

        Args:
            payload: ``name``, ``author``, ``pages``, ``year`` and
                optionally ``isbn``.
        Returns:
            A tuple ``(book_id, error)``.
        """
        data, error = self._request("POST", BOOKS_PATH, json_body=payload)
        if error:
            return None, error
        return (data or {}).get("id"), None

    def update_book(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Replace a book.

        Args:
            payload: The full desired state, including the book ``id``.
        Returns:
            A tuple ``(book_id, error)``.
        """
        data, error = self._request("PUT", BOOKS_PATH, json_body=payload)
        if error:
            return None, error
        return (data or {}).get("id"), None

    def delete_book(self, book_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete a book.

        Args:
            book_id: Hex identifier of the book.
        Returns:
            A tuple ``(success, error)``.
        """
        data, error = self._request("DELETE", f"{BOOKS_PATH}/{book_id}")
        if error:
            return False, error
        return data is not None, None
