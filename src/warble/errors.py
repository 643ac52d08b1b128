"""Warble exception hierarchy.

Shared across the config store, extension loader, renderer, and ASGI
handler so every module raises and catches the same types.
"""


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when app configuration is invalid.

    Typically surfaced during ``App._freeze()`` at startup.
    """


class MissingOption(ConfigurationError, KeyError):  # noqa: N818
    """A configuration key was read that was never set and has no default."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Missing configuration option {self.key!r}"


class InvalidConfigurationSource(ConfigurationError):  # noqa: N818
    """A configuration source did not yield a mapping of options."""


class ExtensionError(ConfigurationError):
    """The extensions directory or one of its modules is unusable."""


class FragmentNotFound(WarbleError):  # noqa: N818
    """A before/view/after fragment source does not exist.

    Raised before any output is returned, so a failed render never
    leaks a partial page.
    """

    def __init__(self, name: str, source: str) -> None:
        self.name = name
        self.source = source
        super().__init__(name, source)

    def __str__(self) -> str:
        return f"Fragment {self.name!r} not found at {self.source}"
