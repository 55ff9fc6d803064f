"""Transfer port interfaces."""

from pathlib import Path
from typing import Protocol

from ..core.models import LogicalPath
from ..core.progress import ProgressCallback


class FetchPort(Protocol):
    """Port for backends that can stage a source onto a local path."""

    name: str

    def fetch(self, source: LogicalPath, destination: Path, progress: ProgressCallback) -> int:
        """Fetch ``source`` into ``destination``; return bytes transferred."""
        ...


class PushPort(Protocol):
    """Port for backends that can publish a local file to a destination."""

    name: str

    def push(self, source: Path, destination: LogicalPath, progress: ProgressCallback) -> int:
        """Push ``source`` to ``destination``; return bytes transferred."""
        ...


class TransferPort(FetchPort, PushPort, Protocol):
    """Port for backends that move files in both directions."""
