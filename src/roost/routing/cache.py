"""Route cache — persists a RouteTable as pretty-printed JSON.

The record's freshness timestamp is the cache file's modification time.
A record younger than ``min_age`` is trusted without looking at the
controllers; an older one is stale as soon as any controller source is
newer than it.  Writes go through a temporary file and ``os.replace``
so readers never see a truncated record.
"""

import logging
import os
import tempfile
import time
from pathlib import Path

from roost.discovery import source_mtimes
from roost.errors import CacheError
from roost.routing.table import RouteTable

logger = logging.getLogger("roost.cache")


class RouteCache:
    """A single JSON cache record on disk."""

    __slots__ = ("path",)

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def timestamp(self) -> float | None:
        """Return the record's modification time, or None if it is missing."""
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def read(self) -> RouteTable | None:
        """Load the cached table.

        Returns ``None`` when the record is missing, unreadable, or
        malformed.  Never raises for a bad record.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring unreadable route cache %s: %s", self.path, exc)
            return None

        try:
            return RouteTable.from_json(text)
        except CacheError as exc:
            logger.warning("Ignoring corrupt route cache %s: %s", self.path, exc)
            return None

    def write(self, table: RouteTable) -> None:
        """Replace the record with ``table``, atomically.

        The temporary file lives in the same directory so ``os.replace``
        never crosses a filesystem boundary.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(table.to_json())
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d route(s) to %s", len(table), self.path)

    def clear(self) -> None:
        """Remove the record if present."""
        self.path.unlink(missing_ok=True)

    def is_stale(
        self,
        root: str | Path,
        *,
        min_age: float,
        extension: str = ".py",
        now: float | None = None,
    ) -> bool:
        """Decide whether the record must be rebuilt.

        A missing record is stale.  A record younger than ``min_age``
        seconds is fresh even if controllers changed since it was
        written; the controllers directory is not touched in that case.
        """
        cached_at = self.timestamp()
        if cached_at is None:
            return True

        current = time.time() if now is None else now
        if current - cached_at < min_age:
            return False

        for path, mtime in source_mtimes(root, extension):
            if mtime > cached_at:
                logger.debug("Route cache is older than %s", path)
                return True
        return False

    def __repr__(self) -> str:
        return f"RouteCache({str(self.path)!r})"
