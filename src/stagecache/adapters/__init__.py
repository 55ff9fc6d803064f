"""Adapters implementing the stagecache ports."""

from .cache_fs import FsCacheAdapter
from .clock_utc import UtcClockAdapter
from .grid import GridStorageAdapter
from .hash_sha1 import Sha1Adapter
from .local import LocalLinkAdapter
from .logger_std import StdLoggerAdapter
from .metrics import LoggingMetricsAdapter, NoopMetricsAdapter, create_metrics
from .s3 import S3TransferAdapter, create_s3_client, parse_s3_url
from .synapse import SynapseAdapter
from .tool_subprocess import SubprocessToolAdapter
from .vfs import FsspecTransferAdapter

__all__ = [
    "FsCacheAdapter",
    "FsspecTransferAdapter",
    "GridStorageAdapter",
    "LocalLinkAdapter",
    "LoggingMetricsAdapter",
    "NoopMetricsAdapter",
    "S3TransferAdapter",
    "Sha1Adapter",
    "StdLoggerAdapter",
    "SubprocessToolAdapter",
    "SynapseAdapter",
    "UtcClockAdapter",
    "create_metrics",
    "create_s3_client",
    "parse_s3_url",
]
