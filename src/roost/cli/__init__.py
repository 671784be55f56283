"""Roost CLI — inspect, rebuild, and serve a controllers directory.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import sys


def _add_router_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("controllers", help="Path to the controllers directory")
    parser.add_argument(
        "--cache-file",
        default=None,
        help="Route cache file (default: routes.cache.json in the roost package)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — controller discovery and cached routing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List discovered routes")
    _add_router_arguments(routes_parser)
    routes_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Rebuild the route cache before listing",
    )

    # -- roost refresh ----------------------------------------------------
    refresh_parser = subparsers.add_parser("refresh", help="Rebuild the route cache")
    _add_router_arguments(refresh_parser)

    # -- roost run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the controllers with pounce")
    _add_router_arguments(run_parser)
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Rebuild the route cache before serving",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from roost.cli._routes import run_routes

        run_routes(args)
    elif args.command == "refresh":
        from roost.cli._refresh import run_refresh

        run_refresh(args)
    elif args.command == "run":
        from roost.cli._run import run_server

        run_server(args)
