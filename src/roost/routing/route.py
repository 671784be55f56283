"""RouteEntry frozen dataclass and request path normalization."""

from dataclasses import dataclass

from roost.errors import ConfigurationError

# Verbs a controller can bind, in canonical order. Actions use the lower-cased name.
HTTP_VERBS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS")


def normalize_path(raw: str) -> str:
    """Normalize a request path for route lookup.

    Drops the query string and fragment, strips trailing slashes, and
    maps the empty result to ``/``::

        "/example/?page=2" -> "/example"
        ""                 -> "/"
        "///"              -> "/"
    """
    path = raw.partition("?")[0].partition("#")[0]
    path = path.rstrip("/")
    return path or "/"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One (verb, path) binding to a handler class.

    ``handler_type_id`` is a ``"module:QualName"`` string resolvable
    through the router's handler registry.
    """

    verb: str
    path: str
    handler_type_id: str

    def __post_init__(self) -> None:
        verb = self.verb.upper()
        if verb not in HTTP_VERBS:
            msg = f"Unsupported HTTP verb {self.verb!r}. Expected one of: {', '.join(HTTP_VERBS)}"
            raise ConfigurationError(msg)
        if not self.path.startswith("/"):
            msg = f"Route path must start with '/': {self.path!r}"
            raise ConfigurationError(msg)
        if not self.handler_type_id:
            msg = f"Route {verb} {self.path!r} has no handler type id"
            raise ConfigurationError(msg)
        object.__setattr__(self, "verb", verb)
