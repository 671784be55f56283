"""Immutable route table and the builder that folds entries into it.

The table maps verb -> path -> handler type id.  It is built in one
pass from discovered entries, never mutated afterwards, and replaced
wholesale on every rebuild.
"""

import json
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from roost.errors import CacheError, ConfigurationError
from roost.routing.route import HTTP_VERBS, RouteEntry


class RouteTable:
    """Read-only verb -> path -> handler type id mapping.

    Usage::

        table = build_table([RouteEntry("GET", "/users", "app.users:Users")])
        table.lookup("GET", "/users")  # "app.users:Users"
        RouteTable.from_json(table.to_json()) == table  # True
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Mapping[str, Mapping[str, str]] | None = None) -> None:
        frozen: dict[str, MappingProxyType[str, str]] = {}
        for verb in HTTP_VERBS:
            paths = (routes or {}).get(verb)
            if paths:
                frozen[verb] = MappingProxyType(dict(paths))
        self._routes: Mapping[str, Mapping[str, str]] = MappingProxyType(frozen)

    # -- Lookup --

    def lookup(self, verb: str, path: str) -> str | None:
        """Return the handler type id bound to (verb, path), or None."""
        paths = self._routes.get(verb.upper())
        if paths is None:
            return None
        return paths.get(path)

    def verbs_for(self, path: str) -> frozenset[str]:
        """Return every verb bound at ``path``."""
        return frozenset(verb for verb, paths in self._routes.items() if path in paths)

    def entries(self) -> list[RouteEntry]:
        """Flatten the table, verbs in canonical order, paths in insertion order."""
        return [
            RouteEntry(verb, path, type_id)
            for verb, paths in self._routes.items()
            for path, type_id in paths.items()
        ]

    def handler_type_ids(self) -> frozenset[str]:
        """Return every distinct handler type id referenced by the table."""
        return frozenset(
            type_id for paths in self._routes.values() for type_id in paths.values()
        )

    # -- Serialization --

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Return a plain nested dict copy. Verbs without routes are omitted."""
        return {verb: dict(paths) for verb, paths in self._routes.items()}

    def to_json(self) -> str:
        """Serialize to pretty-printed JSON (the cache record format)."""
        return json.dumps(self.to_dict(), indent=4)

    @classmethod
    def from_dict(cls, data: Any) -> "RouteTable":
        """Build a table from a decoded cache record, validating every level.

        Raises ``CacheError`` if the record is not a mapping of known
        verbs to mappings of ``/``-prefixed paths to non-empty type ids.
        """
        if not isinstance(data, dict):
            msg = f"Route table must be a JSON object, got {type(data).__name__}"
            raise CacheError(msg)

        routes: dict[str, dict[str, str]] = {}
        for verb, paths in data.items():
            if verb not in HTTP_VERBS:
                msg = f"Unknown HTTP verb in route table: {verb!r}"
                raise CacheError(msg)
            if not isinstance(paths, dict):
                msg = f"Routes for {verb} must be a JSON object, got {type(paths).__name__}"
                raise CacheError(msg)
            for path, type_id in paths.items():
                if not isinstance(path, str) or not path.startswith("/"):
                    msg = f"Invalid route path for {verb}: {path!r}"
                    raise CacheError(msg)
                if not isinstance(type_id, str) or not type_id:
                    msg = f"Invalid handler type id for {verb} {path!r}: {type_id!r}"
                    raise CacheError(msg)
            routes[verb] = dict(paths)
        return cls(routes)

    @classmethod
    def from_json(cls, text: str) -> "RouteTable":
        """Parse a cache record. Raises ``CacheError`` on any malformation."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            msg = f"Route table is not valid JSON: {exc}"
            raise CacheError(msg) from exc
        return cls.from_dict(data)

    # -- Dunder --

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteTable):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return sum(len(paths) for paths in self._routes.values())

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.entries())

    def __repr__(self) -> str:
        return f"RouteTable({self.to_dict()!r})"


def build_table(entries: Iterable[RouteEntry], *, strict: bool = False) -> RouteTable:
    """Fold route entries into a RouteTable.

    Groups by verb, then by path.  When two entries share a (verb, path)
    the later one wins, so the result depends on entry order.  With
    ``strict=True`` a duplicate that points at a *different* handler
    raises ``ConfigurationError`` instead.
    """
    routes: dict[str, dict[str, str]] = {}
    for entry in entries:
        paths = routes.setdefault(entry.verb, {})
        existing = paths.get(entry.path)
        if strict and existing is not None and existing != entry.handler_type_id:
            msg = (
                f"Route collision: {entry.verb} {entry.path!r} is declared by both "
                f"{existing!r} and {entry.handler_type_id!r}"
            )
            raise ConfigurationError(msg)
        paths[entry.path] = entry.handler_type_id
    return RouteTable(routes)


def find_collisions(entries: Iterable[RouteEntry]) -> list[tuple[str, str, list[str]]]:
    """Return ``(verb, path, type_ids)`` for every (verb, path) bound more than once.

    ``type_ids`` lists the claimants in entry order; the last one is the
    one ``build_table`` keeps.
    """
    claims: dict[tuple[str, str], list[str]] = {}
    for entry in entries:
        claims.setdefault((entry.verb, entry.path), []).append(entry.handler_type_id)
    return [
        (verb, path, type_ids)
        for (verb, path), type_ids in claims.items()
        if len(set(type_ids)) > 1
    ]
