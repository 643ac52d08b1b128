"""Canonical and root URL construction.

Host and the secure-connection flag come from the transport; the
scheme can be pinned with the ``protocol_force`` option (useful behind
a TLS-terminating proxy).
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UrlBuilder:
    """Builds absolute URLs for the current request.

    Usage::

        urls = UrlBuilder(host="example.com", secure=True, base="/site/")
        urls.root_url()            # "https://example.com/"
        urls.root_url(True)        # "https://example.com/site/"
        urls.canonical_url("about")  # "https://example.com/site/about"
    """

    host: str
    secure: bool = False
    base: str = "/"
    protocol_force: str | None = None

    @property
    def scheme(self) -> str:
        if self.protocol_force:
            return self.protocol_force
        return "https" if self.secure else "http"

    def root_url(self, include_base: bool = False) -> str:
        """Scheme and host, followed by the base path or ``/``."""
        path = self.base if include_base else "/"
        return f"{self.scheme}://{self.host}{path}"

    def canonical_url(self, page_path: str) -> str:
        """Absolute URL of *page_path* under the base path."""
        return self.root_url(include_base=True) + page_path
