"""SHA-256 content hashing for source files and corpus snapshots"""

import hashlib
from typing import Iterable


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def combined_hash(parts: Iterable[str]) -> str:
    """Hash an ordered sequence of strings; order and boundaries both matter."""
    h = hashlib.sha256()
    for part in parts:
        h.update(part.encode("utf-8"))
        h.update(b"\0")
    return h.hexdigest()
