"""Explicit handler registration.

Discovery executes each controller module and registers the routable
classes it defines.  The router then resolves cached type ids against
this registry instead of asking the interpreter what happens to be
loaded.  Each Router owns its own registry.
"""

from collections.abc import Iterator
from types import ModuleType

from roost.controller import get_descriptor
from roost.errors import ConfigurationError


def type_id_for(cls: type) -> str:
    """Return the ``"module:QualName"`` id of a handler class."""
    return f"{cls.__module__}:{cls.__qualname__}"


class HandlerRegistry:
    """Mapping of handler type id -> controller class.

    Usage::

        registry = HandlerRegistry()
        registry.register_module(module)
        cls = registry.resolve("users:UsersController")
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: dict[str, type] = {}

    def register(self, cls: type) -> str:
        """Register a controller class and return its type id.

        Registering a class under an id that is already taken replaces
        the previous class (a re-executed module supersedes the old one).
        """
        if get_descriptor(cls) is None:
            msg = f"{cls.__qualname__} has no route descriptor; decorate it with @route()."
            raise ConfigurationError(msg)
        type_id = type_id_for(cls)
        self._handlers[type_id] = cls
        return type_id

    def register_module(self, module: ModuleType) -> list[type]:
        """Register every routed class defined in ``module``, in definition order.

        Classes merely imported into the module are ignored.
        """
        found: list[type] = []
        for value in list(vars(module).values()):
            if not isinstance(value, type):
                continue
            if value.__module__ != module.__name__:
                continue
            if get_descriptor(value) is None:
                continue
            self.register(value)
            found.append(value)
        return found

    def resolve(self, type_id: str) -> type | None:
        """Return the class registered under ``type_id``, or None."""
        return self._handlers.get(type_id)

    def clear(self) -> None:
        """Forget every registered class."""
        self._handlers.clear()

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __repr__(self) -> str:
        return f"<HandlerRegistry {sorted(self._handlers)!r}>"
