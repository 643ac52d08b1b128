"""Development server.

Starts a pounce ASGI server with the live warble App object.
"""

from __future__ import annotations


def run_dev_server(app: object, host: str, port: int, *, reload: bool = False) -> None:
    """Start a single-worker pounce server with the given App.

    Requires the ``server`` extra (``pip install warble[server]``).
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install warble[server]"
        raise RuntimeError(msg) from exc

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    Server(config, app).run()
