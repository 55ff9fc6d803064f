"""Storage-grid adapter.

Objects are downloaded by an external command line client, which writes
``<output dir>/<object id>`` when run with the ``id`` output layout. The file
is then moved onto the requested destination.
"""

import shutil
from pathlib import Path

from ..core.errors import ToolExecutionError, TransferError
from ..core.models import GridObjectPath, LogicalPath
from ..core.progress import ProgressCallback
from ..ports import LoggerPort, ToolRunnerPort


class GridStorageAdapter:
    """FetchPort for ``icgc:`` object identifiers."""

    name = "grid"

    def __init__(self, client: str, runner: ToolRunnerPort, logger: LoggerPort):
        self.client = client
        self.runner = runner
        self.logger = logger

    def command(self, object_id: str, output_dir: Path) -> list[str]:
        return [
            self.client,
            "--quiet",
            "download",
            "--object-id",
            object_id,
            "--output-dir",
            str(output_dir),
            "--output-layout",
            "id",
        ]

    def fetch(self, source: LogicalPath, destination: Path, progress: ProgressCallback) -> int:
        if not isinstance(source, GridObjectPath):
            raise TransferError(
                f"Not a grid object identifier: {source.raw}", backend=self.name, source=source.raw
            )

        output_dir = destination.parent.absolute()
        output_dir.mkdir(parents=True, exist_ok=True)
        args = self.command(source.object_id, output_dir)

        self.logger.info("Running storage client", object_id=source.object_id, output_dir=str(output_dir))
        try:
            exit_code = self.runner.run(args)
        except OSError as e:
            raise ToolExecutionError(
                f"Could not run storage client {self.client}",
                backend=self.name,
                source=source.raw,
            ) from e
        if exit_code != 0:
            raise ToolExecutionError(
                f"Storage client exited with status {exit_code} for {source.object_id}",
                exit_code=exit_code,
                backend=self.name,
                source=source.raw,
            )

        downloaded = output_dir / source.object_id
        if not downloaded.is_file():
            raise ToolExecutionError(
                f"Storage client did not produce {downloaded}",
                exit_code=exit_code,
                backend=self.name,
                source=source.raw,
            )

        self.logger.debug("Moving downloaded object", path=str(downloaded), destination=str(destination))
        if downloaded != destination.absolute():
            try:
                shutil.move(downloaded, destination)
            except OSError as e:
                self.logger.error("Could not move input file", path=str(downloaded), error=str(e))
                raise TransferError(
                    f"Could not move input file {downloaded} to {destination}",
                    backend=self.name,
                    source=source.raw,
                ) from e

        size = destination.stat().st_size
        progress(size, size)
        return size
