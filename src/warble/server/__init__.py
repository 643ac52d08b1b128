"""ASGI request handling, response sending, and the dev server."""
