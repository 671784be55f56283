"""Router — owns the route table, keeps the cache in step, dispatches requests.

The table is either loaded from the route cache or rebuilt by
discovering controllers.  Every rebuild produces a new table and a new
handler registry and swaps both in at once, so a request in flight
always sees one complete table.
"""

import importlib
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import anyio.to_thread

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.invoke import invoke
from roost.config import RouterConfig
from roost.controller import Handler
from roost.discovery import discover_entries, import_root_for, load_module
from roost.errors import ConfigurationError
from roost.http.response import Response, not_found
from roost.registry import HandlerRegistry
from roost.routing.cache import RouteCache
from roost.routing.route import RouteEntry, normalize_path
from roost.routing.table import RouteTable, build_table, find_collisions
from roost.server.negotiation import negotiate
from roost.server.sender import send_response

logger = logging.getLogger("roost.router")


class Router:
    """Controller router with a refresh-on-demand route cache.

    Usage::

        router = Router("app/controllers")
        router.dispatch("GET", "/example")   # ExampleController().get()
        router.refresh()                     # controllers changed

    The router is also an ASGI application::

        from roost.server.dev import run_server
        run_server(router, "127.0.0.1", 8000)
    """

    __slots__ = ("_cache", "_config", "_controllers_dir", "_lock", "_registry", "_table")

    def __init__(
        self,
        controllers_dir: str | Path,
        refresh: bool = False,
        *,
        config: RouterConfig | None = None,
    ) -> None:
        if not controllers_dir or not Path(controllers_dir).is_dir():
            msg = (
                "Router requires a valid path to the controllers directory, "
                f"got {str(controllers_dir)!r}."
            )
            raise ConfigurationError(msg)

        self._config = config or RouterConfig()
        self._controllers_dir = Path(controllers_dir).resolve()
        self._cache = RouteCache(self._config.resolved_cache_file())
        self._lock = threading.Lock()
        self._table = RouteTable()
        self._registry = HandlerRegistry()

        if refresh:
            self.refresh()
        else:
            self.load_controllers()

    # -- Properties --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def controllers_dir(self) -> Path:
        return self._controllers_dir

    @property
    def cache(self) -> RouteCache:
        return self._cache

    @property
    def table(self) -> RouteTable:
        """The current route table (an immutable snapshot)."""
        return self._table

    @property
    def routes(self) -> list[RouteEntry]:
        """All current routes, verbs in canonical order."""
        return self._table.entries()

    # -- Lifecycle --

    def load_controllers(self, min_cache_age: float | None = None) -> bool:
        """Load routes from the cache, rebuilding when it is missing or stale.

        Args:
            min_cache_age: Seconds a cache record is trusted without
                checking controller modification times.  Defaults to
                ``config.min_cache_age``.

        Returns:
            True if the table was rebuilt from the controllers directory.
        """
        min_age = self._config.min_cache_age if min_cache_age is None else min_cache_age

        cached = self._cache.read()
        if cached is not None and not self._cache.is_stale(
            self._controllers_dir,
            min_age=min_age,
            extension=self._config.extension,
        ):
            with self._lock:
                self._table = cached
                self._registry = HandlerRegistry()
            return False

        self.refresh()
        return True

    def refresh(self) -> RouteTable:
        """Rediscover controllers, rewrite the cache, and swap in the new table."""
        registry = HandlerRegistry()
        entries = discover_entries(
            self._controllers_dir,
            registry,
            extension=self._config.extension,
        )
        for verb, path, type_ids in find_collisions(entries):
            logger.warning(
                "Route collision on %s %s: %s; using %s",
                verb,
                path,
                ", ".join(type_ids),
                type_ids[-1],
            )
        table = build_table(entries, strict=self._config.strict_routes)

        with self._lock:
            self._cache.write(table)
            self._table = table
            self._registry = registry

        logger.info("Rebuilt route table: %d route(s) from %s", len(table), self._controllers_dir)
        return table

    async def arefresh(self) -> RouteTable:
        """Run :meth:`refresh` in a worker thread without blocking the event loop."""
        return await anyio.to_thread.run_sync(self.refresh)

    def dispose(self) -> None:
        """Drop the route table and registered handlers.

        Every lookup misses until ``load_controllers()`` or ``refresh()``
        is called again.  The cache record is left on disk.
        """
        with self._lock:
            self._table = RouteTable()
            self._registry = HandlerRegistry()

    # -- Handler resolution --

    def handler_class(self, type_id: str) -> type:
        """Resolve a handler type id to its controller class.

        Tries the registry, then the controller source file under the
        controllers import root, then a regular import.  Type ids carry
        the module path relative to that root (``admin.users:Users`` is
        ``admin/users.py``), so a table loaded from the cache resolves
        without rediscovery.
        """
        registry = self._registry
        cls = registry.resolve(type_id)
        if cls is not None:
            return cls

        module_name, _, qualname = type_id.partition(":")
        if not module_name or not qualname:
            msg = f"Invalid handler type id {type_id!r}; expected 'module:ClassName'."
            raise ConfigurationError(msg)

        source = self._source_for(module_name)
        if source is not None:
            with self._lock:
                cls = registry.resolve(type_id)
                if cls is None:
                    registry.register_module(load_module(source, module_name))
                    cls = registry.resolve(type_id)
            if cls is not None:
                return cls

        try:
            obj: Any = importlib.import_module(module_name)
            for attr in qualname.split("."):
                obj = getattr(obj, attr)
        except (ImportError, AttributeError) as exc:
            msg = f"Cannot resolve handler {type_id!r}: {exc}"
            raise ConfigurationError(msg) from exc
        if not isinstance(obj, type):
            msg = f"Handler {type_id!r} resolved to {type(obj).__name__}, not a class"
            raise ConfigurationError(msg)
        return obj

    def _source_for(self, module_name: str) -> Path | None:
        import_root = import_root_for(self._controllers_dir / "_")
        base = import_root.joinpath(*module_name.split("."))
        for candidate in (
            base.with_name(base.name + self._config.extension),
            base / f"__init__{self._config.extension}",
        ):
            if candidate.is_file():
                return candidate
        return None

    # -- Dispatch --

    def resolve(self, method: str, path: str) -> Callable[[], Any] | None:
        """Return the bound action for a request, or None if nothing matches.

        The handler class is instantiated with no arguments.  Errors
        from resolving or constructing it propagate: they mean the
        controller is misconfigured, not that the route is missing.
        """
        verb = method.upper()
        type_id = self._table.lookup(verb, normalize_path(path))
        if type_id is None:
            return None

        controller = self.handler_class(type_id)()
        if isinstance(controller, Handler):
            return controller.action(verb)
        action = getattr(controller, verb.lower(), None)
        return action if callable(action) else None

    def dispatch(self, method: str = "GET", path: str = "/") -> Any:
        """Dispatch a request and return the action's result.

        Returns a ``404 Not Found`` Response when no route matches or the
        controller has no action for the verb.
        """
        action = self.resolve(method, path)
        if action is None:
            return not_found()
        return action()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        method = scope.get("method") or "GET"
        path = scope.get("path") or "/"
        # Resolving may execute controller source on a cold registry
        action = await anyio.to_thread.run_sync(self.resolve, method, path)
        if action is None:
            response: Response = not_found()
        else:
            response = negotiate(await invoke(action))
        await send_response(response, send)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def __repr__(self) -> str:
        return f"<Router {str(self._controllers_dir)!r} routes={len(self._table)}>"
