"""Kida environment setup for page fragments.

Creates a kida Environment rooted at the pages directory. The
environment is created once during ``App._freeze()`` and shared by
every request.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, FileSystemLoader


def create_environment(options: Mapping[str, Any]) -> Environment:
    """Create a kida Environment from the app options.

    Uses ``directory_pages`` as the template root, ``autoescape`` for
    output escaping, and reloads templates from disk in ``debug`` mode.
    """
    return Environment(
        loader=FileSystemLoader(str(options["directory_pages"])),
        autoescape=bool(options["autoescape"]),
        auto_reload=bool(options["debug"]),
    )
