"""
Application package initializer.

The catalog is organised into a few small pieces: ``core`` holds
configuration, logging, errors and the MongoDB plumbing, ``schemas``
the book record and its projections, ``services`` the persistence
logic, ``api`` the JSON routes and ``views`` the rendered pages.
"""

from .main import app  # noqa: F401
