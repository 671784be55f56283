"""``roost run`` — serve a controllers directory.

Builds a Router and hands it to the pounce server as an ASGI app.
"""

import argparse
import sys

from roost.cli._resolve import build_router


def run_server(args: argparse.Namespace) -> None:
    """Start a pounce server for ``args.controllers``.

    CLI flags override the router config's host and port.
    """
    router = build_router(args, refresh=args.refresh)

    host = args.host or router.config.host
    port = args.port or router.config.port

    from roost.server.dev import run_server as serve

    try:
        serve(router, host, port)
    except ImportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
