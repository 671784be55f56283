"""Controller discovery for a controllers directory.

Walks the directory tree, executes every source module it finds, and
registers the routed classes each module defines.  For every registered
class and every verb it has an action for, discovery emits one
:class:`RouteEntry`.

Scan order is sorted by name at every level, depth-first, with
subdirectories visited where they sort.  When two controllers declare
the same (verb, path), the one scanned later wins.
"""

import importlib.util
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

from roost.controller import get_descriptor, supported_verbs
from roost.errors import ConfigurationError
from roost.registry import HandlerRegistry, type_id_for
from roost.routing.route import RouteEntry

logger = logging.getLogger("roost.discovery")


def iter_sources(root: str | Path, extension: str = ".py") -> Iterator[Path]:
    """Yield every file under ``root`` whose name ends with ``extension``.

    Each directory is visited once (by device and inode), so symlinked
    directory cycles terminate.
    """
    yield from _walk_directory(Path(root), extension, visited=set())


def _walk_directory(
    directory: Path,
    extension: str,
    *,
    visited: set[tuple[int, int]],
) -> Iterator[Path]:
    try:
        stat = directory.stat()
    except OSError:
        return
    key = (stat.st_dev, stat.st_ino)
    if key in visited:
        logger.debug("Skipping already visited directory %s", directory)
        return
    visited.add(key)

    with os.scandir(directory) as it:
        items = sorted(it, key=lambda entry: entry.name)

    for item in items:
        path = Path(item.path)
        if item.is_dir():
            yield from _walk_directory(path, extension, visited=visited)
        elif item.is_file() and item.name.endswith(extension):
            yield path


def source_mtimes(root: str | Path, extension: str = ".py") -> Iterator[tuple[Path, float]]:
    """Yield ``(path, mtime)`` for every source unit, without loading any."""
    for path in iter_sources(root, extension):
        try:
            yield path, path.stat().st_mtime
        except OSError:
            # Removed between listing and stat
            continue


def import_root_for(path: str | Path) -> Path:
    """Return the nearest ancestor of ``path`` that is not a package."""
    directory = Path(path).resolve().parent
    while (directory / "__init__.py").is_file() and directory.parent != directory:
        directory = directory.parent
    return directory


def _package_prefix(directory: Path) -> list[str]:
    parts: list[str] = []
    while (directory / "__init__.py").is_file() and directory.parent != directory:
        parts.insert(0, directory.name)
        directory = directory.parent
    return parts


def module_name_for(path: str | Path, root: str | Path | None = None) -> str:
    """Return the dotted module name of a source file.

    With ``root`` (the controllers directory), every directory between
    ``root`` and the file is a qualifier, package or not, so two files
    with the same name in different subdirectories never share a name.
    Packages enclosing ``root`` itself are prefixed::

        controllers/admin/users.py            -> "admin.users"
        app/controllers/users.py (packages)   -> "app.controllers.users"

    Without ``root`` only enclosing packages qualify the stem.
    """
    file = Path(path).absolute()
    if root is None:
        parts = [*_package_prefix(file.parent), file.stem]
    else:
        base = Path(root).absolute()
        relative = file.relative_to(base)
        parts = [*_package_prefix(base), *relative.parent.parts, file.stem]
    if parts[-1] == "__init__":
        parts.pop()
    if not parts:
        # A top-level __init__.py with no enclosing package
        parts = [file.parent.name]
    return ".".join(parts)


def load_module(path: str | Path, module_name: str) -> ModuleType:
    """Execute a source file as a fresh module named ``module_name``.

    The module is executed on every call so edits on disk are picked up,
    and it is not inserted into ``sys.modules``.  Any error raised while
    executing it is reported as a ``ConfigurationError``.
    """
    file = Path(path)
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load controller module from {file}"
        raise ConfigurationError(msg)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Error while loading controller module {module_name!r} from {file}: {exc}"
        raise ConfigurationError(msg) from exc
    return module


def discover_entries(
    root: str | Path,
    registry: HandlerRegistry,
    *,
    extension: str = ".py",
) -> list[RouteEntry]:
    """Load every controller module under ``root`` and return its route entries.

    Args:
        root: Controllers directory.
        registry: Registry that receives every routed class found.
        extension: Source file suffix to scan for.

    Returns:
        Route entries in scan order, ready for ``build_table()``.
    """
    entries: list[RouteEntry] = []
    sources: dict[str, Path] = {}
    for path in iter_sources(root, extension):
        module_name = module_name_for(path, root)
        module = load_module(path, module_name)
        handlers = registry.register_module(module)
        if not handlers:
            logger.debug("No controllers in %s", path)
            continue

        logger.debug("Loaded %d controller(s) from %s", len(handlers), path)
        for cls in handlers:
            descriptor = get_descriptor(cls)
            if descriptor is None:
                continue
            type_id = type_id_for(cls)
            previous = sources.setdefault(type_id, path)
            if previous != path:
                msg = f"Handler type id {type_id!r} is defined by both {previous} and {path}"
                raise ConfigurationError(msg)
            for verb in supported_verbs(cls):
                entries.append(RouteEntry(verb, descriptor.path, type_id))
    return entries
