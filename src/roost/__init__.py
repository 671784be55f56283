"""Roost — controller discovery and cached routing.

Maps (method, path) to a controller action.  Controllers declare their
path with ``@route``; actions are methods named after HTTP verbs::

    from roost import Controller, route

    @route("/example")
    class ExampleController(Controller):
        def get(self):
            return "Hello, World!"

Point a Router at the directory holding them::

    from roost import Router

    router = Router("app/controllers")
    router.dispatch("GET", "/example")  # "Hello, World!"

Discovered routes are cached as JSON and only rediscovered when the
cache is missing, corrupt, or older than the controllers.
"""

__version__ = "0.1.0"
__all__ = [
    "CacheError",
    "ConfigurationError",
    "Controller",
    "Handler",
    "HandlerDescriptor",
    "HandlerRegistry",
    "Response",
    "RoostError",
    "RouteCache",
    "RouteEntry",
    "RouteTable",
    "Router",
    "RouterConfig",
    "build_table",
    "route",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from roost.routing.router import Router

        return Router

    if name == "RouterConfig":
        from roost.config import RouterConfig

        return RouterConfig

    if name in ("Controller", "Handler", "HandlerDescriptor", "route"):
        from roost import controller as _controller

        return getattr(_controller, name)

    if name == "HandlerRegistry":
        from roost.registry import HandlerRegistry

        return HandlerRegistry

    if name in ("RouteTable", "build_table"):
        from roost.routing import table as _table

        return getattr(_table, name)

    if name == "RouteEntry":
        from roost.routing.route import RouteEntry

        return RouteEntry

    if name == "RouteCache":
        from roost.routing.cache import RouteCache

        return RouteCache

    if name == "Response":
        from roost.http.response import Response

        return Response

    if name in ("CacheError", "ConfigurationError", "RoostError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
