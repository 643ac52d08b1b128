"""Request path to view resolution.

The route table maps each language to its own ``path -> view`` pages.
Resolution strips the configured base path, then scans languages in
table order: the first language that knows the path decides both the
view and the language. Unknown and empty paths fall back to the
default view instead of failing.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from warble.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ViewDescriptor:
    """A view registered under a localized path.

    Attributes:
        view: Fragment name of the page body (e.g. ``"about"``).
        title: Optional display title exposed to fragments as ``title``.
    """

    view: str
    title: str | None = None

    @classmethod
    def from_config(cls, value: Any) -> ViewDescriptor:
        """Build a descriptor from a view name or a ``{"view", "title"}`` mapping."""
        if isinstance(value, ViewDescriptor):
            return value
        if isinstance(value, str):
            return cls(view=value)
        if isinstance(value, Mapping) and isinstance(value.get("view"), str):
            title = value.get("title")
            return cls(view=value["view"], title=None if title is None else str(title))
        msg = f"Invalid view descriptor {value!r}: expected a view name or a mapping with 'view'"
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class ResolvedPage:
    """The outcome of resolving one request path.

    ``language`` is ``None`` when the path did not encode a language
    (default view), leaving the choice to negotiation.
    """

    path: str
    view: str
    title: str | None = None
    language: str | None = None


@dataclass(frozen=True, slots=True)
class RouteTable:
    """Ordered per-language page maps. Order decides ambiguous paths."""

    languages: tuple[tuple[str, Mapping[str, ViewDescriptor]], ...] = ()

    @classmethod
    def from_config(cls, value: Any) -> RouteTable:
        """Build a table from ``pages_available``.

        Accepts a mapping (its insertion order is the scan order) or a
        sequence of ``(language, pages)`` pairs.
        """
        if isinstance(value, RouteTable):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            items = list(value.items())
        else:
            try:
                items = [(language, pages) for language, pages in value]
            except (TypeError, ValueError):
                msg = f"Invalid route table {value!r}: expected a mapping or (language, pages) pairs"
                raise ConfigurationError(msg) from None

        languages: list[tuple[str, Mapping[str, ViewDescriptor]]] = []
        for language, pages in items:
            if not isinstance(pages, Mapping):
                msg = f"Pages for language {language!r} must be a mapping, got {type(pages).__name__}"
                raise ConfigurationError(msg)
            descriptors = {
                str(path): ViewDescriptor.from_config(desc) for path, desc in pages.items()
            }
            languages.append((str(language), descriptors))
        return cls(tuple(languages))

    def __iter__(self) -> Iterator[tuple[str, Mapping[str, ViewDescriptor]]]:
        return iter(self.languages)

    def __len__(self) -> int:
        return len(self.languages)

    def lookup(self, path: str) -> tuple[str, ViewDescriptor] | None:
        """Return ``(language, descriptor)`` for the first language knowing *path*."""
        for language, pages in self.languages:
            descriptor = pages.get(path)
            if descriptor is not None:
                return language, descriptor
        return None


def strip_base(request_path: str, base: str) -> str:
    """Left-trim every leading character that appears in *base*.

    This is a character-class trim, not a prefix removal: with
    ``base="/a"`` the path ``/aaa/about`` becomes ``bout``. Kept for
    compatibility with existing route tables.
    """
    return request_path.lstrip(base)


def resolve_page(
    request_path: str,
    table: RouteTable,
    default_view: str,
    default_title: str | None = None,
    base: str = "/",
) -> ResolvedPage:
    """Resolve *request_path* to a page.

    Args:
        request_path: URL path without query string (e.g. ``/fr/apropos``).
        table: Route table scanned in language order.
        default_view: View used for the empty path and unknown paths.
        default_title: Title paired with *default_view*.
        base: Base path configured as ``page_base``.

    Returns:
        The matched page, or the default page with ``path=""`` and
        ``language=None``.
    """
    path = strip_base(request_path, base)
    if path:
        match = table.lookup(path)
        if match is not None:
            language, descriptor = match
            return ResolvedPage(
                path=path,
                view=descriptor.view,
                title=descriptor.title,
                language=language,
            )
    return ResolvedPage(path="", view=default_view, title=default_title, language=None)
