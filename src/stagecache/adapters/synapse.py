"""Synapse repository adapter."""

import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import synapseclient

from ..core.errors import TransferError
from ..core.models import LogicalPath
from ..core.progress import ProgressCallback
from ..ports import LoggerPort


class SynapseAdapter:
    """FetchPort for Synapse entity ids such as ``syn12345``."""

    name = "synapse"

    def __init__(
        self,
        logger: LoggerPort,
        api_key: str | None = None,
        user_name: str | None = None,
        client_factory: Callable[[], Any] = synapseclient.Synapse,
    ):
        self.logger = logger
        self.api_key = api_key
        self.user_name = user_name
        self.client_factory = client_factory

    def _login(self) -> Any:
        client = self.client_factory()
        credentials: dict[str, str] = {}
        if self.user_name:
            credentials["email"] = self.user_name
        if self.api_key:
            credentials["authToken"] = self.api_key
        client.login(silent=True, **credentials)
        return client

    def fetch(self, source: LogicalPath, destination: Path, progress: ProgressCallback) -> int:
        # The client names the file after the entity, so it gets a private
        # directory and never collides with neighbours of the destination.
        download_dir: Path | None = None
        try:
            download_dir = Path(tempfile.mkdtemp(prefix=".synapse-", dir=destination.parent))
            client = self._login()
            entity = client.get(
                source.raw,
                downloadLocation=str(download_dir),
                ifcollision="overwrite.local",
            )
            os.replace(entity.path, destination)
            size = destination.stat().st_size
        except Exception as e:
            self.logger.error("Synapse download failed", entity=source.raw, error=str(e))
            raise TransferError(
                f"Could not provision input file from Synapse: {source.raw}",
                backend=self.name,
                source=source.raw,
            ) from e
        finally:
            if download_dir is not None:
                shutil.rmtree(download_dir, ignore_errors=True)

        progress(size, size)
        return size
