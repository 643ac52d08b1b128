"""Application configuration store.

``ConfigStore`` is an ordered option map seeded with documented defaults.
External sources merge over it (last merge wins per key) during setup;
extensions register their instances through ``set()``. The store is
frozen at startup and read-only for the rest of the process.
"""

import importlib.util
import sys
import threading
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from warble.errors import InvalidConfigurationSource, MissingOption

DEFAULTS: Mapping[str, Any] = {
    # Forced URL scheme ("http" / "https"); None = follow the connection
    "protocol_force": None,
    # Route table: language -> {path -> view name or {"view", "title"}}
    "pages_available": {},
    "page_default": "home",
    "page_default_title": None,
    "page_base": "/",
    "page_include_before": (),
    "page_include_after": (),
    "page_extension": ".html",
    "directory_pages": "./pages/",
    # None disables extension discovery; a set path must be a directory
    "directory_extensions": None,
    "languages_available": None,
    "language_default": "en",
    "language_param": "lang",
    "language_cookie": "lang",
    "debug": False,
    "autoescape": True,
}


class ConfigStore(Mapping[str, Any]):
    """Ordered option map with defaults, merge, and a startup freeze.

    Reads go through the ``Mapping`` interface or ``get()``; a key that
    was never set raises ``MissingOption``::

        store = ConfigStore()
        store.merge({"page_default": "index"})
        store.get("page_default")  # "index"
    """

    __slots__ = ("_data", "_frozen", "_lock")

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(DEFAULTS if defaults is None else defaults)
        self._frozen: bool = False
        self._lock: threading.Lock = threading.Lock()

    def __getitem__(self, key: str) -> Any:
        try:
            return self._data[key]
        except KeyError:
            raise MissingOption(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<ConfigStore {state} {list(self._data)!r}>"

    def get(self, key: str) -> Any:  # type: ignore[override]
        """Fetch a single option. Raises ``MissingOption`` if never set."""
        return self[key]

    def set(self, key: str, value: Any) -> None:
        """Store a single option, overwriting any previous value."""
        with self._lock:
            self._check_not_frozen()
            self._data[key] = value

    def merge(self, source: object, *, origin: str = "<mapping>") -> None:
        """Merge *source* over the current options, key by key.

        Raises:
            InvalidConfigurationSource: If *source* is not a mapping.
        """
        if not isinstance(source, Mapping):
            msg = (
                f"The configuration source {origin} must provide a mapping, "
                f"got {type(source).__name__}"
            )
            raise InvalidConfigurationSource(msg)
        with self._lock:
            self._check_not_frozen()
            for key, value in source.items():
                self._data[str(key)] = value

    def load(self, path: str | Path) -> None:
        """Load a configuration file and merge it over the current options."""
        self.merge(load_config_file(path), origin=str(path))

    def freeze(self) -> None:
        """Make the store read-only. Idempotent."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def snapshot(self) -> dict[str, Any]:
        """Return a shallow copy of every option, in insertion order."""
        return dict(self._data)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the configuration after the app has started. "
                "Set options and register extensions before serving requests."
            )
            raise RuntimeError(msg)


def load_config_file(path: str | Path) -> Any:
    """Execute a Python configuration file and return its ``CONFIG`` value.

    The file is an ordinary module::

        # site_config.py
        CONFIG = {
            "languages_available": ["en", "fr"],
            "pages_available": {"en": {"about": "about"}},
        }

    The value is returned as-is; ``ConfigStore.merge()`` validates it.

    Raises:
        InvalidConfigurationSource: If the file is missing, cannot be
            loaded, or does not define ``CONFIG``.
    """
    file = Path(path)
    if not file.is_file():
        msg = f"Configuration file not found: {file}"
        raise InvalidConfigurationSource(msg)

    spec = importlib.util.spec_from_file_location(f"_warble_config_{file.stem}", file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load configuration file {file}"
        raise InvalidConfigurationSource(msg)

    module = importlib.util.module_from_spec(spec)
    # dataclasses resolve string annotations through sys.modules[__name__]
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(spec.name, None)
        raise

    if not hasattr(module, "CONFIG"):
        msg = f"The configuration file {file} must define a CONFIG mapping"
        raise InvalidConfigurationSource(msg)
    return module.CONFIG
