"""S3 transfer adapter built on boto3's managed transfers."""

import threading
from pathlib import Path

import boto3
from boto3.exceptions import Boto3Error
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import TransferError
from ..core.models import S3_PREFIX, LogicalPath, ObjectLocation
from ..core.progress import ProgressCallback
from ..ports import LoggerPort

_S3_ERRORS = (BotoCoreError, ClientError, Boto3Error, OSError)


def parse_s3_url(url: str) -> ObjectLocation:
    """Split ``s3://bucket/some/key`` into bucket ``bucket`` and key ``some/key``."""
    trimmed = url[len(S3_PREFIX) :] if url.startswith(S3_PREFIX) else url
    parts = trimmed.split("/")
    bucket = parts[0]
    key = "/".join(parts[1:])
    if not bucket or not key:
        raise ValueError(f"Invalid S3 URL: {url}")
    return ObjectLocation(bucket=bucket, key=key)


def create_s3_client(endpoint_url: str | None = None, path_style: bool = False) -> BaseClient:
    """Build an S3 client, optionally against a custom endpoint."""
    cfg = Config(s3={"addressing_style": "path" if path_style else "auto"})
    if endpoint_url:
        return boto3.client("s3", endpoint_url=endpoint_url, config=cfg)
    return boto3.client("s3", config=cfg)


class _ByteCounter:
    """Turns boto3's per-chunk byte callbacks into cumulative progress.

    boto3 invokes the callback from its transfer threads.
    """

    def __init__(self, total: int, progress: ProgressCallback):
        self.total = total
        self.progress = progress
        self.transferred = 0
        self._lock = threading.Lock()

    def __call__(self, bytes_amount: int) -> None:
        with self._lock:
            self.transferred += bytes_amount
            self.progress(self.transferred, self.total)


class S3TransferAdapter:
    """FetchPort and PushPort for ``s3://`` URLs."""

    name = "s3"

    def __init__(
        self,
        logger: LoggerPort,
        endpoint_url: str | None = None,
        path_style: bool = False,
        client: BaseClient | None = None,
    ):
        self.logger = logger
        self.endpoint_url = endpoint_url
        self.path_style = path_style
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> BaseClient:
        with self._client_lock:
            if self._client is None:
                if self.endpoint_url:
                    self.logger.info("Found custom S3 endpoint", endpoint=self.endpoint_url)
                self._client = create_s3_client(self.endpoint_url, self.path_style)
            return self._client

    def fetch(self, source: LogicalPath, destination: Path, progress: ProgressCallback) -> int:
        location = self._location(source)
        try:
            head = self.client.head_object(Bucket=location.bucket, Key=location.key)
            total = int(head["ContentLength"])
            if total == 0:
                progress(0, 0)
            self.client.download_file(
                location.bucket,
                location.key,
                str(destination),
                Callback=_ByteCounter(total, progress),
            )
        except _S3_ERRORS as e:
            self.logger.error("S3 download failed", url=source.raw, error=str(e))
            raise TransferError(
                f"Could not provision input file from S3: {source.raw}",
                backend=self.name,
                source=source.raw,
            ) from e
        return total

    def push(self, source: Path, destination: LogicalPath, progress: ProgressCallback) -> int:
        location = self._location(destination)
        try:
            total = source.stat().st_size
            if total == 0:
                progress(0, 0)
            self.client.upload_file(
                str(source),
                location.bucket,
                location.key,
                Callback=_ByteCounter(total, progress),
            )
        except _S3_ERRORS as e:
            self.logger.error("S3 upload failed", url=destination.raw, error=str(e))
            raise TransferError(
                f"Could not provision output file to S3: {destination.raw}",
                backend=self.name,
                source=str(source),
            ) from e
        return total

    def _location(self, path: LogicalPath) -> ObjectLocation:
        try:
            return parse_s3_url(path.raw)
        except ValueError as e:
            raise TransferError(str(e), backend=self.name, source=path.raw) from e
