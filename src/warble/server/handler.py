"""ASGI handler — translates ASGI scope/messages to warble types.

The only component that touches raw ASGI HTTP messages. Converts the
scope to a typed Request, dispatches the page on a worker thread
(fragment rendering reads from disk), and sends the buffered Response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import anyio

from warble._internal.asgi import Receive, Scope, Send
from warble.http.request import Request
from warble.server.errors import handle_internal_error
from warble.server.sender import send_response

if TYPE_CHECKING:
    from warble.app import App


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    app: App,
    debug: bool,
) -> None:
    """Process a single HTTP request through the page pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(dict(scope))

    try:
        response = await anyio.to_thread.run_sync(app.respond, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    await send_response(response, send, head=request.method == "HEAD")
