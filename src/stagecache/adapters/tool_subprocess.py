"""Subprocess adapter for external tools."""

import subprocess


class SubprocessToolAdapter:
    """Runs external commands with ``subprocess``, inheriting stdio."""

    def run(self, args: list[str]) -> int:
        completed = subprocess.run(args, check=False)
        return completed.returncode
