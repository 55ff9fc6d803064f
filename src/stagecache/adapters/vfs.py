"""Generic remote adapter over fsspec.

Any URL scheme fsspec can resolve works here: http(s), ftp, gcs, memory,
and whatever else is installed.
"""

from pathlib import Path

from fsspec import AbstractFileSystem
from fsspec.core import url_to_fs

from ..core.errors import TransferError
from ..core.files import replacing
from ..core.models import LogicalPath
from ..core.progress import ProgressCallback, copy_stream
from ..ports import LoggerPort


def _known_size(fs: AbstractFileSystem, path: str) -> int | None:
    try:
        size = fs.size(path)
    except (OSError, NotImplementedError):
        return None
    return int(size) if size is not None else None


class FsspecTransferAdapter:
    """FetchPort and PushPort for arbitrary fsspec URLs."""

    name = "remote"

    def __init__(self, logger: LoggerPort):
        self.logger = logger

    def fetch(self, source: LogicalPath, destination: Path, progress: ProgressCallback) -> int:
        destination = destination.absolute()
        destination.parent.mkdir(parents=True, exist_ok=True)
        # A failed stream leaves the existing destination, and any cache
        # entry linked to it, as it was.
        with replacing(destination) as staging:
            return self._transfer(source.raw, str(staging), progress, direction="input")

    def push(self, source: Path, destination: LogicalPath, progress: ProgressCallback) -> int:
        return self._transfer(str(source.absolute()), destination.raw, progress, direction="output")

    def _transfer(self, src_url: str, dst_url: str, progress: ProgressCallback, direction: str) -> int:
        try:
            src_fs, src_path = url_to_fs(src_url)
            dst_fs, dst_path = url_to_fs(dst_url)
            total = _known_size(src_fs, src_path)
            self.logger.debug("Streaming file", source=src_url, destination=dst_url, size=total)
            with src_fs.open(src_path, "rb") as src, dst_fs.open(dst_path, "wb") as dst:
                return copy_stream(src, dst, total, progress)
        except Exception as e:
            self.logger.error("Remote transfer failed", source=src_url, destination=dst_url, error=str(e))
            raise TransferError(
                f"Could not provision {direction} file: {src_url} -> {dst_url}",
                backend=self.name,
                source=src_url,
            ) from e
