"""Extension registry.

An extension is any object built by a factory that receives the app.
Factories are registered by name, either directly::

    app.extensions.register("analytics", Analytics)

or discovered from a directory where each ``<name>.py`` module exposes
a ``setup(app)`` factory. At startup every factory is called once and
its instance is stored in the config store under its name, which makes
it available to fragments (``{{ analytics.snippet() }}``).
"""

from __future__ import annotations

import importlib.util
import logging
import re
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from warble.errors import ExtensionError

if TYPE_CHECKING:
    from warble.app import App

logger = logging.getLogger("warble.extensions")

ExtensionFactory = Callable[["App"], Any]

# Extension module names usable as option keys
_NAME_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


class ExtensionRegistry:
    """Ordered mapping of extension name to factory.

    Registration order is instantiation order.
    """

    __slots__ = ("_factories",)

    def __init__(self) -> None:
        self._factories: dict[str, ExtensionFactory] = {}

    def register(self, name: str, factory: ExtensionFactory) -> None:
        """Register *factory* under *name*, replacing an earlier one."""
        if not _NAME_RE.match(name):
            msg = f"Invalid extension name {name!r}"
            raise ExtensionError(msg)
        if not callable(factory):
            msg = f"Extension {name!r} factory is not callable"
            raise ExtensionError(msg)
        self._factories[name] = factory

    def discover(self, directory: str | Path) -> list[str]:
        """Register every extension module found in *directory*.

        Modules are loaded in sorted filename order; names starting
        with ``_`` are skipped.

        Returns:
            The registered extension names.

        Raises:
            ExtensionError: If *directory* is not a directory, or a
                module has no callable ``setup``.
        """
        root = Path(directory)
        if not root.is_dir():
            msg = f"Cannot load extensions from '{directory}'. Doesn't appear to be a directory."
            raise ExtensionError(msg)

        names: list[str] = []
        for item in sorted(root.iterdir()):
            if not item.is_file() or item.suffix != ".py" or item.name.startswith("_"):
                continue
            if not _NAME_RE.match(item.stem):
                continue
            self.register(item.stem, _load_setup(item))
            names.append(item.stem)
        logger.debug("Discovered %d extension(s) in %s", len(names), root)
        return names

    def instantiate(self, app: App) -> dict[str, Any]:
        """Call every factory with *app* and return ``name -> instance``."""
        instances: dict[str, Any] = {}
        for name, factory in self._factories.items():
            instances[name] = factory(app)
            logger.info("Loaded extension %s", name)
        return instances

    def items(self) -> list[tuple[str, ExtensionFactory]]:
        """Registered ``(name, factory)`` pairs in registration order."""
        return list(self._factories.items())

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)


def _load_setup(file: Path) -> ExtensionFactory:
    """Load the ``setup`` factory from an extension module."""
    spec = importlib.util.spec_from_file_location(f"_warble_ext_{file.stem}", file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load extension module {file}"
        raise ExtensionError(msg)

    module = importlib.util.module_from_spec(spec)
    # dataclasses resolve string annotations through sys.modules[__name__]
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(spec.name, None)
        raise

    factory = getattr(module, "setup", None)
    if factory is None or not callable(factory):
        msg = f"Extension module {file} must define a callable 'setup(app)'"
        raise ExtensionError(msg)
    return factory
