"""Core domain logic."""

from .classifier import classify, is_synapse_id
from .config import StageCacheConfig
from .errors import (
    ConfigurationError,
    NoBackendError,
    StageCacheError,
    ToolExecutionError,
    TransferError,
)
from .models import (
    CacheKey,
    GridObjectPath,
    LocalPath,
    LogicalPath,
    ObjectLocation,
    ProvisionResult,
    RemotePath,
    TransferDescriptor,
)
from .progress import ProgressTracker, copy_stream, percent_complete

__all__ = [
    "CacheKey",
    "ConfigurationError",
    "GridObjectPath",
    "LocalPath",
    "LogicalPath",
    "NoBackendError",
    "ObjectLocation",
    "ProgressTracker",
    "ProvisionResult",
    "RemotePath",
    "StageCacheConfig",
    "StageCacheError",
    "ToolExecutionError",
    "TransferDescriptor",
    "TransferError",
    "classify",
    "is_synapse_id",
    "copy_stream",
    "percent_complete",
]
