"""Cache port interface."""

from pathlib import Path
from typing import Protocol

from ..core.models import CacheKey


class CachePort(Protocol):
    """Port for the path-keyed hard-link cache."""

    root: Path

    def key_for(self, logical: str) -> CacheKey:
        """Compute the cache key of a logical path string."""
        ...

    def entry_path(self, logical: str) -> Path:
        """Get path where the entry for ``logical`` lives."""
        ...

    def ensure_root(self) -> None:
        """Create the cache root if missing."""
        ...

    def lookup(self, logical: str, destination: Path) -> Path | None:
        """Hard-link a cached entry onto ``destination``; return the entry on a hit."""
        ...

    def populate(self, logical: str, local_file: Path) -> bool:
        """Link ``local_file`` into the cache unless an entry already exists."""
        ...
