"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

# Cache record location when none is configured: beside the installed package.
DEFAULT_CACHE_FILE = Path(__file__).resolve().parent / "routes.cache.json"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(cache_file="var/routes.json", min_cache_age=60)
    """

    # Route cache
    cache_file: str | Path | None = None
    min_cache_age: float = 3600.0  # Seconds before controller mtimes are re-checked

    # Discovery
    extension: str = ".py"
    strict_routes: bool = False  # Duplicate (verb, path) becomes a ConfigurationError

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    def resolved_cache_file(self) -> Path:
        """Return the effective cache record path."""
        if self.cache_file is None:
            return DEFAULT_CACHE_FILE
        return Path(self.cache_file)
