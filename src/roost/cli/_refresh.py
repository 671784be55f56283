"""``roost refresh`` — force a rebuild of the route cache."""

import argparse

from roost.cli._resolve import build_router


def run_refresh(args: argparse.Namespace) -> None:
    router = build_router(args, refresh=True)
    print(f"Wrote {len(router.table)} route(s) to {router.cache.path}")
