"""Immutable HTTP request.

Only the parts page dispatch reads: path, one query parameter, one
cookie, the ``Accept-Language`` header, and where the request arrived
(host, scheme). The request line and body are the transport's business.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

from warble.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``query_string`` is kept undecoded; ``query_value()`` and
    ``cookie()`` pick out the single value negotiation needs.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query_string: str = ""
    scheme: str = "http"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # -- Lookups --

    def query_value(self, name: str) -> str | None:
        """First value of query parameter *name*, or None if absent."""
        for key, value in parse_qsl(self.query_string, keep_blank_values=True):
            if key == name:
                return value
        return None

    def cookie(self, name: str) -> str | None:
        """Value of cookie *name*, or None if the client did not send it.

        The first occurrence wins; browsers list the most specific path
        first.
        """
        for pair in self.headers.get("cookie", "").split(";"):
            key, sep, value = pair.partition("=")
            if sep and key.strip() == name:
                return value.strip()
        return None

    @property
    def accept_language(self) -> str | None:
        """The ``Accept-Language`` header value."""
        return self.headers.get("accept-language")

    @property
    def host(self) -> str:
        """The ``Host`` header, else the server address from the transport."""
        host = self.headers.get("host")
        if host:
            return host
        if self.server is not None:
            name, port = self.server
            default_port = 443 if self.is_secure else 80
            return name if port == default_port else f"{name}:{port}"
        return "localhost"

    @property
    def is_secure(self) -> bool:
        """True when the connection was made over TLS."""
        return self.scheme in ("https", "wss")

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope.get("method", "GET"),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            scheme=scope.get("scheme", "http"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )

    @classmethod
    def build(
        cls,
        path: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        query_string: str = "",
        scheme: str = "http",
    ) -> Request:
        """Create a Request without a transport (CLI rendering, tests)."""
        return cls(
            method=method,
            path=path,
            headers=Headers.from_dict(headers or {}),
            query_string=query_string,
            scheme=scheme,
        )
