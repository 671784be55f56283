"""Development server.

Starts a pounce ASGI server with a live Router object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roost.routing.router import Router


def run_server(
    router: Router,
    host: str,
    port: int,
    *,
    workers: int = 1,
) -> None:
    """Start a pounce server serving ``router``.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but we have a live ``Router`` object. We use ``pounce.Server``
    directly with the ASGI callable.

    Requires the ``server`` extra (``pip install roost[server]``).

    Args:
        router: The Router to serve (it is the ASGI callable).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install roost[server]"
        raise ImportError(msg) from exc

    config = ServerConfig(host=host, port=port, workers=workers)
    server = Server(config, router)
    server.run()
