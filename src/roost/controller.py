"""Controllers — route descriptors and the action lookup contract.

A controller is a class carrying a :class:`HandlerDescriptor` (attached
with the :func:`route` decorator) and one or more action methods named
after HTTP verbs::

    from roost import Controller, route

    @route("/example", name="example")
    class ExampleController(Controller):
        def get(self):
            return "hello"

        def post(self):
            return {"created": True}

Subclassing :class:`Controller` is optional.  Any class with a
descriptor and verb-named methods is routable; ``Controller`` only adds
the :meth:`Controller.action` lookup and :meth:`Controller.route_url`.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

from roost.errors import ConfigurationError
from roost.routing.route import HTTP_VERBS

_DESCRIPTOR_ATTR = "__roost_route__"

T = TypeVar("T", bound=type)


@dataclass(frozen=True, slots=True)
class HandlerDescriptor:
    """Declarative route metadata attached to one controller class.

    Attributes:
        path: URL path the controller answers (e.g. ``/example``).
        name: Optional route name.
        middleware: Ordered middleware identifiers.  Carried as data only;
            roost does not execute middleware.
    """

    path: str
    name: str | None = None
    middleware: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.path:
            msg = "Route descriptor requires a non-empty path."
            raise ConfigurationError(msg)
        object.__setattr__(self, "middleware", tuple(self.middleware))


def route(
    path: str,
    *,
    name: str | None = None,
    middleware: Iterable[str] = (),
) -> Callable[[T], T]:
    """Attach a :class:`HandlerDescriptor` to a controller class.

    A class declares at most one descriptor; decorating it twice raises
    ``ConfigurationError``.
    """
    descriptor = HandlerDescriptor(path=path, name=name, middleware=tuple(middleware))

    def decorator(cls: T) -> T:
        if _DESCRIPTOR_ATTR in vars(cls):
            msg = f"{cls.__qualname__} already declares a route descriptor."
            raise ConfigurationError(msg)
        setattr(cls, _DESCRIPTOR_ATTR, descriptor)
        return cls

    return decorator


def get_descriptor(cls: type) -> HandlerDescriptor | None:
    """Return the descriptor declared directly on ``cls``.

    Descriptors are not inherited: a subclass of a routed controller is
    only routable if it declares its own.
    """
    descriptor = vars(cls).get(_DESCRIPTOR_ATTR)
    if isinstance(descriptor, HandlerDescriptor):
        return descriptor
    return None


def supported_verbs(cls: type) -> tuple[str, ...]:
    """Return the verbs ``cls`` has a callable action for, in canonical order."""
    return tuple(verb for verb in HTTP_VERBS if callable(getattr(cls, verb.lower(), None)))


@runtime_checkable
class Handler(Protocol):
    """Anything that can hand the dispatcher an action for a verb.

    ``action()`` returns a zero-argument callable, or ``None`` when the
    verb is not supported.
    """

    def action(self, verb: str) -> Callable[[], Any] | None: ...


class Controller:
    """Optional base class for controllers."""

    @classmethod
    def route_url(cls) -> str | None:
        """Return the route path declared on this class, or None."""
        descriptor = get_descriptor(cls)
        return descriptor.path if descriptor is not None else None

    def action(self, verb: str) -> Callable[[], Any] | None:
        """Return the bound action for ``verb`` (case-insensitive), or None."""
        if verb.upper() not in HTTP_VERBS:
            return None
        method = getattr(self, verb.lower(), None)
        if method is None or not callable(method):
            return None
        return method
