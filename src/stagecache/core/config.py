"""Centralized configuration for stagecache."""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path.home() / ".stagecache" / "config"
DEFAULT_CACHE_DIR = Path.home() / ".stagecache" / "cache"
DEFAULT_GRID_CLIENT = "/icgc/dcc-storage/bin/dcc-storage-client"

# Section that holds keys written before any [section] header.
_ROOT_SECTION = "stagecache"


@dataclass(slots=True)
class StageCacheConfig:
    """All stagecache configuration in one place.

    INI keys (all optional; keys may sit before any section header, or be
    addressed as ``section.key``):
        cache-dir:              Cache root. Default ~/.stagecache/cache.
        s3.endpoint:            Custom S3 endpoint URL (MinIO, Ceph, ...).
        s3.path-style-access:   Path-style addressing. Defaults to on when an
                                endpoint is configured.
        synapse-api-key:        Synapse API key / personal access token.
        synapse-user-name:      Synapse user name.
        grid-storage.client:    Path to the storage-grid download client.
        log-level:              Logging level. Default "INFO".
        metrics:                "noop" or "logging" (default).
        max-workers:            Thread pool size for batch staging. Default 4.

    Environment variables override the file:
        SC_CACHE_DIR, SC_LOG_LEVEL, SC_METRICS.
    """

    cache_dir: Path = DEFAULT_CACHE_DIR
    s3_endpoint: str | None = None
    s3_path_style: bool = False
    synapse_api_key: str | None = field(default=None, repr=False)
    synapse_user_name: str | None = None
    grid_client: str = DEFAULT_GRID_CLIENT
    log_level: str = "INFO"
    metrics_type: str = "logging"
    max_workers: int = 4

    @classmethod
    def from_ini(cls, path: Path | str, *, log_level: str | None = None) -> "StageCacheConfig":
        """Build config from an INI file, then apply environment overrides."""
        values = read_ini(Path(path))
        return cls.from_mapping(values, log_level=log_level)

    @classmethod
    def from_env(cls, *, log_level: str | None = None) -> "StageCacheConfig":
        """Build config from defaults and environment variables only."""
        return cls.from_mapping({}, log_level=log_level)

    @classmethod
    def from_mapping(
        cls, values: dict[str, str], *, log_level: str | None = None
    ) -> "StageCacheConfig":
        endpoint = values.get("s3.endpoint") or None
        path_style_raw = values.get("s3.path-style-access")
        if path_style_raw is None:
            path_style = endpoint is not None
        else:
            path_style = _parse_bool("s3.path-style-access", path_style_raw)

        cache_dir = os.environ.get("SC_CACHE_DIR") or values.get("cache-dir")
        return cls(
            cache_dir=Path(cache_dir).expanduser() if cache_dir else DEFAULT_CACHE_DIR,
            s3_endpoint=endpoint,
            s3_path_style=path_style,
            synapse_api_key=values.get("synapse-api-key"),
            synapse_user_name=values.get("synapse-user-name"),
            grid_client=values.get("grid-storage.client", DEFAULT_GRID_CLIENT),
            log_level=(
                log_level
                or os.environ.get("SC_LOG_LEVEL")
                or values.get("log-level", "INFO")
            ).upper(),
            metrics_type=os.environ.get("SC_METRICS") or values.get("metrics", "logging"),
            max_workers=_parse_int("max-workers", values.get("max-workers", "4")),
        )


def read_ini(path: Path) -> dict[str, str]:
    """Flatten an INI file into ``{"key": ..., "section.key": ...}``."""
    try:
        text = path.read_text()
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    parser = configparser.ConfigParser(
        interpolation=None, strict=False, default_section="__defaults__"
    )
    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=str(path))
    except configparser.Error as e:
        raise ConfigurationError(f"Malformed config file {path}: {e}") from e

    values: dict[str, str] = {}
    for section in parser.sections():
        for key, value in parser.items(section):
            name = key if section == _ROOT_SECTION else f"{section}.{key}"
            values[name] = value.strip()
    return values


def _parse_bool(name: str, value: str) -> bool:
    try:
        return configparser.ConfigParser.BOOLEAN_STATES[value.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Invalid boolean for {name}: {value!r}") from None


def _parse_int(name: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid integer for {name}: {value!r}") from None
    if parsed < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {parsed}")
    return parsed
