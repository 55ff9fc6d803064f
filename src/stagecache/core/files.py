"""Helpers for putting files in place without touching existing inodes."""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def replacing(destination: Path) -> Iterator[Path]:
    """Yield an unused sibling path of ``destination``; rename it over ``destination`` on success.

    An existing ``destination`` is replaced as a directory entry, never
    truncated, so other hard links to it (the source, a cache entry) keep
    their content. On failure the sibling is removed and ``destination`` is
    left untouched.
    """
    fd, name = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.name}.", suffix=".part"
    )
    os.close(fd)
    staging = Path(name)
    staging.unlink()
    try:
        yield staging
        os.replace(staging, destination)
    except BaseException:
        staging.unlink(missing_ok=True)
        raise
