"""
API package containing the JSON routes.

``router`` aggregates the endpoint modules and is mounted under
``/api`` by ``main.create_app``.
"""
