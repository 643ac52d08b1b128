"""Language negotiation.

Picks exactly one language per request, checking in order:

1. A language encoded in the resolved route (explicit hint)
2. The ``lang`` query parameter, if supported
3. The ``lang`` cookie, if supported (a stored preference)
4. The ``Accept-Language`` header, ranked by quality factor
5. The configured default

Only the first two are new decisions the caller should persist.
Everything here is a pure function of its inputs.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass

# One Accept-Language entry: primary[-sub] with an optional ;q=1 / ;q=0.xxx
_ENTRY_RE = re.compile(
    r"\s*([a-z]{1,8})(?:-[a-z0-9]{1,8})?\s*(?:;\s*q\s*=\s*(1|0\.[0-9]+))?\s*",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class LanguageDecision:
    """The negotiated language and whether to store it as a preference."""

    language: str
    persist: bool = False


def parse_accept_language(header: str | None) -> tuple[tuple[str, float], ...]:
    """Parse an ``Accept-Language`` value into ranked ``(primary, quality)`` pairs.

    Tags are reduced to their lowercased primary subtag. Entries whose
    quality factor is not ``1`` or ``0.<digits>``, and wildcards, are
    dropped. The result is sorted by quality, highest first; equal
    qualities keep their header order::

        >>> parse_accept_language("fr-CH, fr;q=0.9, en;q=0.8")
        (('fr', 1.0), ('fr', 0.9), ('en', 0.8))
    """
    if not header:
        return ()
    entries: list[tuple[str, float]] = []
    for raw in header.split(","):
        match = _ENTRY_RE.fullmatch(raw)
        if match is None:
            continue
        primary, quality = match.groups()
        entries.append((primary.lower(), 1.0 if quality is None else float(quality)))
    # sorted() is stable, so ties stay in header order
    return tuple(sorted(entries, key=lambda entry: entry[1], reverse=True))


def match_accept_language(header: str | None, supported: Collection[str]) -> str | None:
    """Return the best-ranked language from *header* that is in *supported*."""
    for primary, _quality in parse_accept_language(header):
        if primary in supported:
            return primary
    return None


def negotiate_language(
    explicit: str | None,
    query: str | None,
    cookie: str | None,
    accept_language: str | None,
    supported: Collection[str],
    default: str,
) -> LanguageDecision:
    """Decide the request language.

    Args:
        explicit: Language from the resolved route, or ``None``.
        query: Value of the language query parameter, if present.
        cookie: Value of the language preference cookie, if present.
        accept_language: Raw ``Accept-Language`` header value.
        supported: Languages the app serves (exact, case-sensitive).
        default: Fallback when nothing else applies.

    Returns:
        A ``LanguageDecision``; ``persist`` is True only for the route
        hint and the query parameter.
    """
    if explicit is not None:
        return LanguageDecision(explicit, persist=True)
    if query is not None and query in supported:
        return LanguageDecision(query, persist=True)
    if cookie is not None and cookie in supported:
        return LanguageDecision(cookie)
    negotiated = match_accept_language(accept_language, supported)
    if negotiated is not None:
        return LanguageDecision(negotiated)
    return LanguageDecision(default)
