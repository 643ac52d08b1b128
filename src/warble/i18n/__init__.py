"""Language negotiation for localized pages."""

from warble.i18n.negotiation import (
    LanguageDecision,
    match_accept_language,
    negotiate_language,
    parse_accept_language,
)

__all__ = [
    "LanguageDecision",
    "match_accept_language",
    "negotiate_language",
    "parse_accept_language",
]
