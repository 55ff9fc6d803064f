"""Local file adapter: hard link, falling back to a byte-wise copy."""

import os
from pathlib import Path

from ..core.errors import TransferError
from ..core.files import replacing
from ..core.models import LogicalPath
from ..core.progress import ProgressCallback, copy_stream
from ..ports import LoggerPort


class LocalLinkAdapter:
    """FetchPort for files already on a local filesystem."""

    name = "local"

    def __init__(self, logger: LoggerPort, working_dir: Path | None = None):
        self.logger = logger
        self.working_dir = working_dir

    def resolve(self, raw: str) -> Path:
        """Absolute paths stay as they are; relative ones hang off the working dir."""
        path = Path(raw)
        if path.is_absolute():
            return path
        return (self.working_dir or Path.cwd()) / path

    def fetch(self, source: LogicalPath, destination: Path, progress: ProgressCallback) -> int:
        actual = self.resolve(source.raw)
        destination.parent.mkdir(parents=True, exist_ok=True)

        with replacing(destination) as staging:
            try:
                os.link(actual, staging)
            except OSError as link_error:
                self.logger.warning(
                    "Could not link, copying instead",
                    source=str(actual),
                    destination=str(destination),
                    error=str(link_error),
                )
                try:
                    return self._copy(actual, staging, progress)
                except OSError as e:
                    raise TransferError(
                        f"Could not copy {source.raw} to {destination}",
                        backend=self.name,
                        source=source.raw,
                    ) from e

            size = staging.stat().st_size
        progress(size, size)
        return size

    def _copy(self, source: Path, destination: Path, progress: ProgressCallback) -> int:
        total = source.stat().st_size
        with open(source, "rb") as src, open(destination, "xb") as dst:
            return copy_stream(src, dst, total, progress)
