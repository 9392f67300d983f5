"""Content hashing for result cache keys"""

import hashlib


def text_key(text: str) -> str:
    """Return the hex SHA-256 of text; equal texts always share a key."""
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()
