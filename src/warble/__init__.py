"""Warble — localized pages composed from fragments.

Resolves a request path to a view and a language, then renders the
view between its "before" and "after" fragments with kida.

Basic usage::

    from warble import App

    app = App({
        "languages_available": ["en", "fr"],
        "pages_available": {
            "en": {"about": "about"},
            "fr": {"apropos": "about"},
        },
        "page_include_before": ["header"],
        "page_include_after": ["footer"],
    })

    # Serve ``app`` with any ASGI server, or render offline:
    html = app.render("/apropos")
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigStore",
    "ConfigurationError",
    "ExtensionError",
    "FragmentNotFound",
    "InvalidConfigurationSource",
    "LanguageDecision",
    "MissingOption",
    "Request",
    "ResolvedPage",
    "Response",
    "RouteTable",
    "UrlBuilder",
    "ViewDescriptor",
    "WarbleError",
    "negotiate_language",
    "resolve_page",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    if name == "App":
        from warble.app import App

        return App

    if name == "ConfigStore":
        from warble.config import ConfigStore

        return ConfigStore

    if name in ("Request", "Response"):
        from warble.http import request as _req
        from warble.http import response as _resp

        return getattr(_req if name == "Request" else _resp, name)

    if name in ("LanguageDecision", "negotiate_language"):
        from warble.i18n import negotiation as _neg

        return getattr(_neg, name)

    if name in ("ResolvedPage", "RouteTable", "ViewDescriptor", "resolve_page"):
        from warble.routing import resolver as _resolver

        return getattr(_resolver, name)

    if name == "UrlBuilder":
        from warble.urls import UrlBuilder

        return UrlBuilder

    if name in (
        "ConfigurationError",
        "ExtensionError",
        "FragmentNotFound",
        "InvalidConfigurationSource",
        "MissingOption",
        "WarbleError",
    ):
        from warble import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
