"""Hello World — the simplest roost app.

Controllers live in ``controllers/``; the route cache is written next to
this file so the example never touches the installed package.

Run:
    python app.py
"""

from pathlib import Path

from roost import Router, RouterConfig

HERE = Path(__file__).parent

router = Router(
    HERE / "controllers",
    config=RouterConfig(cache_file=HERE / "routes.cache.json"),
)

if __name__ == "__main__":
    from roost.server.dev import run_server

    run_server(router, router.config.host, router.config.port)
