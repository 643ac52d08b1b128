"""HTTP response and the Set-Cookie directive it carries.

Responses are immutable; ``with_cookie()`` returns a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive.

    Only session cookies: a stored language preference lasts until the
    browser drops it.
    """

    name: str
    value: str
    path: str = "/"
    secure: bool = False
    samesite: Literal["lax", "strict", "none"] = "lax"

    @property
    def header_value(self) -> str:
        """Serialized ``Set-Cookie`` header value."""
        value = f"{self.name}={self.value}; Path={self.path}; SameSite={self.samesite.capitalize()}"
        return f"{value}; Secure" if self.secure else value


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    # -- Transformations --

    def with_cookie(self, name: str, value: str, *, path: str = "/", secure: bool = False) -> Response:
        """Return a new Response with an additional Set-Cookie."""
        cookie = SetCookie(name=name, value=value, path=path, secure=secure)
        return replace(self, cookies=(*self.cookies, cookie))

    # -- Body access --

    @property
    def body_bytes(self) -> bytes:
        """Body encoded as bytes."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """Body decoded as text."""
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")

    def header(self, name: str) -> str | None:
        """Return the first header named *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None
