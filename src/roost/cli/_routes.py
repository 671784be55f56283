"""``roost routes`` — list the route table.

Builds a Router for a controllers directory (loading the cache when it
is fresh) and prints every route with method, path, and handler.
"""

import argparse

from roost.cli._resolve import build_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, and handler type id."""
    router = build_router(args, refresh=args.refresh)

    rows = [(entry.verb, entry.path, entry.handler_type_id) for entry in router.routes]
    if not rows:
        print("No routes registered.")
        return

    # Column widths
    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler in rows:
        print(fmt.format(method, path, handler))
