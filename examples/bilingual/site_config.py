"""Configuration for the bilingual example site.

Render a page offline::

    warble render examples/bilingual/site_config.py /fr/apropos
"""

from pathlib import Path

HERE = Path(__file__).parent

CONFIG = {
    "directory_pages": str(HERE / "pages"),
    "directory_extensions": str(HERE / "ext"),
    "page_base": "/",
    "languages_available": ["en", "fr"],
    "language_default": "en",
    "pages_available": {
        "en": {
            "about": {"view": "about", "title": "About"},
        },
        "fr": {
            "apropos": {"view": "about", "title": "À propos"},
        },
    },
    "page_include_before": ["header"],
    "page_include_after": ["footer"],
    "site_name": "Warble",
}
