"""External tool port interface."""

from typing import Protocol


class ToolRunnerPort(Protocol):
    """Port for running an external command line tool."""

    def run(self, args: list[str]) -> int:
        """Run ``args`` to completion and return the exit status."""
        ...
