"""CLI main entry point."""

import json
import os
import sys
from pathlib import Path

import click

from ...adapters import (
    FsCacheAdapter,
    FsspecTransferAdapter,
    GridStorageAdapter,
    LocalLinkAdapter,
    S3TransferAdapter,
    Sha1Adapter,
    StdLoggerAdapter,
    SubprocessToolAdapter,
    SynapseAdapter,
    UtcClockAdapter,
    create_metrics,
)
from ...core import StageCacheConfig, StageCacheError, TransferDescriptor
from ...core.config import DEFAULT_CONFIG_PATH
from ...core.service import ProvisioningService


def load_config(config_path: Path | None, log_level: str | None = None) -> StageCacheConfig:
    """Read the config file if there is one, else fall back to defaults and env."""
    if config_path is None:
        env_path = os.environ.get("SC_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return StageCacheConfig.from_env(log_level=log_level)
    return StageCacheConfig.from_ini(config_path, log_level=log_level)


def create_service(config: StageCacheConfig) -> ProvisioningService:
    """Create service with wired adapters."""
    logger = StdLoggerAdapter(level=config.log_level)
    hasher = Sha1Adapter()
    cache = FsCacheAdapter(config.cache_dir, hasher, logger)

    return ProvisioningService(
        cache=cache,
        logger=logger,
        metrics=create_metrics(config.metrics_type),
        clock=UtcClockAdapter(),
        local=LocalLinkAdapter(logger),
        grid=GridStorageAdapter(config.grid_client, SubprocessToolAdapter(), logger),
        synapse=SynapseAdapter(
            logger,
            api_key=config.synapse_api_key,
            user_name=config.synapse_user_name,
        ),
        s3=S3TransferAdapter(
            logger,
            endpoint_url=config.s3_endpoint,
            path_style=config.s3_path_style,
        ),
        remote=FsspecTransferAdapter(logger),
        max_workers=config.max_workers,
    )


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="INI config file (default: ~/.stagecache/config)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, debug: bool) -> None:
    """stagecache - stage workflow files through a local hard-link cache."""
    try:
        config = load_config(config_path, "DEBUG" if debug else None)
        ctx.obj = create_service(config)
    except (StageCacheError, ValueError) as e:
        _fail(str(e))


@cli.command()
@click.argument("source")
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--no-cache", is_flag=True, help="Neither use nor populate the cache")
@click.pass_obj
def get(service: ProvisioningService, source: str, destination: Path, no_cache: bool) -> None:
    """Stage SOURCE (path, icgc:<id>, syn<id> or URL) at DESTINATION."""
    try:
        result = service.provision_input(source, destination, use_cache=not no_cache)
    except StageCacheError as e:
        _fail(str(e))
        return
    click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("url")
@click.pass_obj
def put(service: ProvisioningService, file: Path, url: str) -> None:
    """Push local FILE to URL (s3:// or any fsspec URL)."""
    try:
        result = service.provision_output(file, url)
    except StageCacheError as e:
        _fail(str(e))
        return
    click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command()
@click.argument("manifest", type=click.File("r"))
@click.option("-j", "--jobs", type=click.IntRange(min=1), help="Parallel transfers")
@click.option("--no-cache", is_flag=True, help="Neither use nor populate the cache")
@click.pass_obj
def stage(service: ProvisioningService, manifest, jobs: int | None, no_cache: bool) -> None:
    """Stage every input listed in MANIFEST.

    MANIFEST is a JSON list of {"source": ..., "destination": ...} objects.
    """
    try:
        entries = json.load(manifest)
        descriptors = [
            TransferDescriptor(source=e["source"], destination=e["destination"]) for e in entries
        ]
    except (ValueError, KeyError, TypeError) as e:
        _fail(f"Invalid manifest: {e}")
        return

    try:
        results = service.provision_inputs(descriptors, jobs, use_cache=not no_cache)
    except StageCacheError as e:
        _fail(str(e))
        return
    click.echo(json.dumps([r.to_dict() for r in results], indent=2))


@cli.command("cache-path")
@click.argument("source")
@click.pass_obj
def cache_path(service: ProvisioningService, source: str) -> None:
    """Print where the cache entry for SOURCE lives (or would live).

    Entries sit under the configured cache-dir, ~/.stagecache/cache unless
    the config file or SC_CACHE_DIR says otherwise.
    """
    entry = service.cache.entry_path(source)
    output = {
        "source": source,
        "key": service.cache.key_for(source).digest,
        "path": str(entry),
        "exists": entry.exists(),
    }
    click.echo(json.dumps(output, indent=2))


def main() -> None:
    """Main entry point."""
    cli()
