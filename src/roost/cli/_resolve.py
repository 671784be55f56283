"""Router construction from parsed CLI arguments.

Shared by ``roost routes``, ``roost refresh`` and ``roost run``.
"""

import argparse
import sys

from roost.config import RouterConfig
from roost.errors import ConfigurationError
from roost.routing.router import Router


def build_router(args: argparse.Namespace, *, refresh: bool = False) -> Router:
    """Build a Router for ``args.controllers``.

    Exits with status 1 and a message on stderr if the controllers
    directory is invalid or a controller fails to load.
    """
    config = RouterConfig(cache_file=args.cache_file)
    try:
        return Router(args.controllers, refresh=refresh, config=config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
