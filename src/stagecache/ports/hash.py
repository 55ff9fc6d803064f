"""Hash port interface."""

from typing import Protocol


class HashPort(Protocol):
    """Port for hash operations."""

    def sha1_text(self, text: str) -> str:
        """Lowercase hex SHA-1 of a UTF-8 string."""
        ...
