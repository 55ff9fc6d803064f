"""Tests for configuration loading."""

from pathlib import Path

import pytest

from stagecache.core.config import DEFAULT_CACHE_DIR, DEFAULT_GRID_CLIENT, StageCacheConfig, read_ini
from stagecache.core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SC_CACHE_DIR", "SC_LOG_LEVEL", "SC_METRICS", "SC_CONFIG"):
        monkeypatch.delenv(name, raising=False)


def write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config"
    path.write_text(text)
    return path


def test_defaults() -> None:
    config = StageCacheConfig.from_env()

    assert config.cache_dir == DEFAULT_CACHE_DIR
    assert config.grid_client == DEFAULT_GRID_CLIENT
    assert config.s3_endpoint is None
    assert config.s3_path_style is False
    assert config.log_level == "INFO"
    assert config.metrics_type == "logging"


def test_flat_keys(tmp_path: Path) -> None:
    path = write(
        tmp_path,
        "cache-dir = /scratch/cache\n"
        "s3.endpoint = http://minio:9000\n"
        "synapse-api-key = secret\n"
        "synapse-user-name = alice\n"
        "grid-storage.client = /opt/grid/client\n"
        "max-workers = 8\n",
    )

    config = StageCacheConfig.from_ini(path)

    assert config.cache_dir == Path("/scratch/cache")
    assert config.s3_endpoint == "http://minio:9000"
    assert config.s3_path_style is True
    assert config.synapse_api_key == "secret"
    assert config.synapse_user_name == "alice"
    assert config.grid_client == "/opt/grid/client"
    assert config.max_workers == 8
    assert "secret" not in repr(config)


def test_sectioned_keys(tmp_path: Path) -> None:
    path = write(
        tmp_path,
        "[s3]\nendpoint = https://object.example.org\npath-style-access = false\n",
    )

    config = StageCacheConfig.from_ini(path)

    assert config.s3_endpoint == "https://object.example.org"
    assert config.s3_path_style is False


def test_read_ini_flattens_sections(tmp_path: Path) -> None:
    path = write(tmp_path, "cache-dir = /c\n[grid-storage]\nclient = /bin/client\n")

    assert read_ini(path) == {"cache-dir": "/c", "grid-storage.client": "/bin/client"}


def test_environment_overrides_file(tmp_path: Path, monkeypatch) -> None:
    path = write(tmp_path, "cache-dir = /from/file\nlog-level = info\n")
    monkeypatch.setenv("SC_CACHE_DIR", str(tmp_path / "env-cache"))
    monkeypatch.setenv("SC_LOG_LEVEL", "warning")

    config = StageCacheConfig.from_ini(path)

    assert config.cache_dir == tmp_path / "env-cache"
    assert config.log_level == "WARNING"


def test_explicit_log_level_wins(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SC_LOG_LEVEL", "ERROR")

    assert StageCacheConfig.from_env(log_level="DEBUG").log_level == "DEBUG"


def test_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read"):
        StageCacheConfig.from_ini(tmp_path / "nope")


def test_malformed_file_is_an_error(tmp_path: Path) -> None:
    path = write(tmp_path, "this line is not ini\n")

    with pytest.raises(ConfigurationError, match="Malformed"):
        StageCacheConfig.from_ini(path)


@pytest.mark.parametrize(
    "text",
    ["s3.path-style-access = sometimes\n", "max-workers = many\n", "max-workers = 0\n"],
)
def test_invalid_values_are_errors(tmp_path: Path, text: str) -> None:
    with pytest.raises(ConfigurationError):
        StageCacheConfig.from_ini(write(tmp_path, text))
