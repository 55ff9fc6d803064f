"""SHA-1 hashing adapter."""

import hashlib


class Sha1Adapter:
    """SHA-1 implementation of HashPort."""

    def sha1_text(self, text: str) -> str:
        return hashlib.sha1(text.encode("utf-8")).hexdigest()
