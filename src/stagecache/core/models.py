"""Core domain models."""

from dataclasses import dataclass
from pathlib import Path

GRID_STORAGE_SCHEME = "icgc"
S3_PREFIX = "s3://"


@dataclass(frozen=True, slots=True)
class LocalPath:
    """A plain filesystem path, absolute or relative to the working directory."""

    raw: str

    @property
    def path(self) -> Path:
        return Path(self.raw)


@dataclass(frozen=True, slots=True)
class GridObjectPath:
    """An object identifier resolved through the storage-grid client."""

    raw: str
    object_id: str


@dataclass(frozen=True, slots=True)
class RemotePath:
    """Anything URL-addressable: s3://, http(s)://, and other fsspec schemes."""

    raw: str

    @property
    def uri(self) -> str:
        return self.raw


LogicalPath = LocalPath | GridObjectPath | RemotePath


@dataclass(frozen=True, slots=True)
class CacheKey:
    """SHA-1 of a logical path string, split into a two-level directory layout."""

    digest: str

    @property
    def prefix(self) -> str:
        return self.digest[:2]

    @property
    def suffix(self) -> str:
        return self.digest[2:]

    def relative_path(self) -> Path:
        return Path(self.prefix) / self.suffix


@dataclass(frozen=True, slots=True)
class ObjectLocation:
    """Bucket and key of an S3 object."""

    bucket: str
    key: str

    @property
    def url(self) -> str:
        return f"{S3_PREFIX}{self.bucket}/{self.key}"


@dataclass(slots=True)
class TransferDescriptor:
    """One file to stage: a logical source and the local path it should land at.

    For outputs ``source`` is the local file and ``destination`` the URL.
    """

    source: str
    destination: str


@dataclass(slots=True)
class ProvisionResult:
    """Summary of a single provisioning call."""

    direction: str  # "input" or "output"
    source: str
    destination: str
    backend: str
    bytes_transferred: int = 0
    cache_hit: bool = False
    cached: bool = False
    duration: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "direction": self.direction,
            "source": self.source,
            "destination": self.destination,
            "backend": self.backend,
            "bytes_transferred": self.bytes_transferred,
            "cache_hit": self.cache_hit,
            "cached": self.cached,
            "duration": round(self.duration, 3),
        }
