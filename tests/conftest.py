"""Shared fixtures: a pages directory with simple fragments."""

from pathlib import Path

import pytest


def write_fragments(directory: Path, fragments: dict[str, str]) -> Path:
    """Write ``name -> source`` fragments into *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, source in fragments.items():
        (directory / name).write_text(source, encoding="utf-8")
    return directory


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """Bilingual site: header/footer and pages in English and French."""
    return write_fragments(
        tmp_path / "pages",
        {
            "en-header.html": "[en-header {{ this_page }}]",
            "en-footer.html": "[en-footer]",
            "en-home.html": "[en-home {{ url_canonical }}]",
            "en-about_page.html": "[en-about {{ url_page }}]",
            "fr-header.html": "[fr-header {{ this_page }}]",
            "fr-footer.html": "[fr-footer]",
            "fr-home.html": "[fr-home {{ url_canonical }}]",
            "fr-about_page.html": "[fr-about {{ url_page }}]",
        },
    )


@pytest.fixture
def site_config(pages_dir: Path) -> dict[str, object]:
    return {
        "directory_pages": str(pages_dir),
        "languages_available": ["en", "fr"],
        "language_default": "en",
        "pages_available": {
            "en": {"about": {"view": "about_page", "title": "About"}},
            "fr": {"apropos": {"view": "about_page", "title": "À propos"}},
        },
        "page_include_before": ["header"],
        "page_include_after": ["footer"],
    }


@pytest.fixture
def fragment_writer():
    """The ``write_fragments`` helper, for tests building their own pages."""
    return write_fragments
