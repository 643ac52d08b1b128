"""Ordered fragment composition.

A page is the concatenation of its "before" fragments, the view body,
and its "after" fragments, each rendered by kida against the same
request scope. Fragment names are prefixed with the negotiated
language (``fr-header.html``) when the app is multilingual.

Output is buffered: every fragment source is located before anything
renders, and the joined result is returned only once all fragments
succeed. A failure never yields a partial page.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from kida import Environment

from warble.errors import FragmentNotFound

LANGUAGE_SEPARATOR = "-"


def language_prefix(language: str | None) -> str:
    """Fragment-name prefix for *language* (``""`` when monolingual)."""
    if not language:
        return ""
    return f"{language}{LANGUAGE_SEPARATOR}"


class Renderer:
    """Renders before/view/after fragments from a pages directory.

    Args:
        env: kida environment whose loader is rooted at *directory*.
        directory: The pages directory (``directory_pages``).
        extension: Fragment file extension (``page_extension``).
    """

    __slots__ = ("directory", "env", "extension")

    def __init__(self, env: Environment, directory: str | Path, extension: str = ".html") -> None:
        self.env = env
        self.directory = Path(directory)
        self.extension = extension

    def fragment_name(self, prefix: str, name: str) -> str:
        """Template name of fragment *name*, relative to the pages directory."""
        return f"{prefix}{name}{self.extension}"

    def render(
        self,
        prefix: str,
        before: Iterable[str],
        view: str,
        after: Iterable[str],
        scope: dict[str, Any],
    ) -> str:
        """Render the page and return its body.

        Every fragment receives the same *scope* dict, in rendering
        order.

        Raises:
            FragmentNotFound: If any fragment source is missing. No
                fragment is rendered in that case.
        """
        names = [*before, view, *after]
        sources = [self._locate(prefix, name) for name in names]

        parts: list[str] = []
        for template_name in sources:
            template = self.env.get_template(template_name)
            parts.append(template.render(scope))
        return "".join(parts)

    def _locate(self, prefix: str, name: str) -> str:
        template_name = self.fragment_name(prefix, name)
        if not (self.directory / template_name).is_file():
            raise FragmentNotFound(name, str(self.directory / template_name))
        return template_name
