"""Server-rendered HTML pages and their templates."""
