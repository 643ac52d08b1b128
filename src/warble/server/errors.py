"""Error responses for failed page requests.

Any failure while dispatching a page (a missing fragment, a template
error, a broken option) becomes a 500. Nothing rendered before the
failure is sent.
"""

import html
import logging

from warble.http.request import Request
from warble.http.response import Response

logger = logging.getLogger("warble.server")


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log *exc* and map it to a 500 response.

    In debug mode the body names the exception; otherwise it is the
    bare status text.
    """
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        detail = html.escape(f"{type(exc).__name__}: {exc}")
        body = f'<pre class="warble-error" data-status="500">{detail}</pre>'
        return Response(body=body, status=500)

    return Response(body="Internal Server Error", status=500, content_type="text/plain; charset=utf-8")
