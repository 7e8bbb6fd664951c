"""Digest computation for submitted passwords."""

import base64
import hashlib


def compute_digest(secret: str) -> str:
    """Return the base64-encoded SHA-512 digest of the UTF-8 encoded secret."""
    raw = hashlib.sha512(secret.encode("utf-8")).digest()
    return base64.b64encode(raw).decode("ascii")
