"""Filesystem hard-link cache adapter.

Entries are addressed by the SHA-1 of the logical path string, not by file
content: ``<root>/<first two hex chars>/<remaining 38 hex chars>``. A changed
remote object behind an unchanged path is still served from the cache.

No locking is done. ``os.link`` refuses to overwrite an existing name, so two
processes racing to populate the same key end up with the first link winning
and the second failing harmlessly.
"""

import os
from pathlib import Path

from ..core.errors import ConfigurationError
from ..core.files import replacing
from ..core.models import CacheKey
from ..ports import HashPort, LoggerPort


class FsCacheAdapter:
    """Filesystem implementation of CachePort."""

    def __init__(self, root: Path, hasher: HashPort, logger: LoggerPort):
        self.root = Path(root)
        self.hasher = hasher
        self.logger = logger

    def key_for(self, logical: str) -> CacheKey:
        return CacheKey(self.hasher.sha1_text(logical))

    def entry_path(self, logical: str) -> Path:
        return self.root / self.key_for(logical).relative_path()

    def ensure_root(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Could not create cache directory: {self.root}") from e

    def lookup(self, logical: str, destination: Path) -> Path | None:
        entry = self.entry_path(logical)
        if not entry.is_file():
            return None

        if not os.access(entry, os.R_OK):
            self.logger.warning("Cached file is not readable, ignoring", entry=str(entry))
            return None

        self.logger.info("Found file in cache, hard-linking", source=logical, entry=str(entry))
        try:
            with replacing(destination) as staging:
                os.link(entry, staging)
        except OSError as e:
            self.logger.warning(
                "Cannot create hard link to cached file, you may want to move your cache",
                entry=str(entry),
                destination=str(destination),
                error=str(e),
            )
            return None
        return entry

    def populate(self, logical: str, local_file: Path) -> bool:
        entry = self.entry_path(logical)
        if entry.exists():
            return False

        self.logger.info("Caching file, hard-linking", file=str(local_file), entry=str(entry))
        try:
            entry.parent.mkdir(exist_ok=True)
            os.link(local_file, entry)
        except OSError as e:
            self.logger.warning(
                "Cannot create hard link for local file, skipping",
                file=str(local_file),
                entry=str(entry),
                error=str(e),
            )
            return False
        return True
