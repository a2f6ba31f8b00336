"""Credential hashing for user secrets.

Secrets are stored as ``"<salt>$<sha256 hex digest>"``. A fresh random salt
is generated per secret with ``secrets`` and comparisons use
``hmac.compare_digest`` so they take the same time whether or not the prefix
matches.
"""

import hashlib
import hmac
import secrets


def _digest(salt: str, secret: str) -> str:
    return hashlib.sha256(f"{salt}:{secret}".encode()).hexdigest()


def hash_secret(secret: str) -> str:
    salt = secrets.token_hex(8)
    return f"{salt}${_digest(salt, secret)}"


def verify_secret(secret: str, secret_hash: str) -> bool:
    """Return True if ``secret`` matches the stored ``secret_hash``."""
    salt, sep, expected = secret_hash.partition("$")
    if not sep:
        return False
    return hmac.compare_digest(_digest(salt, secret), expected)
