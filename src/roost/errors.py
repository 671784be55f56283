"""Roost exception hierarchy.

Shared across discovery, the route cache, the router, and the CLI so
every module raises and catches the same types.
"""


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError, ValueError):
    """Raised when the router or a controller is configured incorrectly.

    Covers a missing controllers directory, an invalid route descriptor,
    a handler class that cannot be resolved or instantiated, and route
    collisions when strict routing is enabled. Never retried.
    """


class CacheError(RoostError):
    """Raised when a persisted route table is malformed.

    Only escapes ``RouteTable.from_json()`` / ``from_dict()``.  The route
    cache catches it and treats the record as a miss.
    """
