"""Command line interface."""

from .main import cli, create_service, main

__all__ = ["cli", "create_service", "main"]
