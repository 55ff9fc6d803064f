"""Classification of logical path strings.

``classify`` never performs I/O and never raises: anything it cannot make
sense of is treated as a local file.
"""

import re
from urllib.parse import urlsplit

from .models import GRID_STORAGE_SCHEME, GridObjectPath, LocalPath, LogicalPath, RemotePath

# Characters a URI may never contain unescaped (RFC 3986).
_ILLEGAL_URI_CHARS = re.compile(r'[\s"<>\\^`{|}]')


def classify(raw: str) -> LogicalPath:
    """Classify ``raw`` as a local file, grid object or remote URL."""
    if _ILLEGAL_URI_CHARS.search(raw):
        return LocalPath(raw)

    try:
        scheme = urlsplit(raw).scheme
    except ValueError:
        return LocalPath(raw)

    if not scheme:
        return LocalPath(raw)

    if scheme.lower() == GRID_STORAGE_SCHEME:
        # Scheme-specific part: everything after "<scheme>:"
        object_id = raw[len(scheme) + 1 :].lower()
        if not object_id:
            return LocalPath(raw)
        return GridObjectPath(raw, object_id=object_id)

    return RemotePath(raw)


SYNAPSE_ID = re.compile(r"^syn\d+$", re.IGNORECASE)


def is_synapse_id(raw: str) -> bool:
    """Whether ``raw`` names a Synapse entity, e.g. ``syn12345``."""
    return SYNAPSE_ID.match(raw) is not None
