"""Bilingual example. Serve with ``warble run examples/bilingual/site_config.py``.

Or mount ``app`` in any ASGI server.
"""

from pathlib import Path

from warble import App

app = App(config_file=Path(__file__).parent / "site_config.py")
