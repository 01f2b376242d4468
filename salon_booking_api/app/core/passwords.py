"""
Password hashing helpers.

Staff passwords are stored in configuration as PBKDF2‑HMAC‑SHA256
digests in the ``"salthex$hashhex"`` format.  The helpers live in their
own module so both the configuration loader and the security layer can
use them without importing each other.
"""

import hashlib
import hmac
import os

ITERATIONS = 100_000


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, ITERATIONS)


def hash_password(password: str) -> str:
    """Return ``"salthex$hashhex"`` for a fresh 16‑byte salt."""
    salt = os.urandom(16)
    return f"{salt.hex()}${_derive(password, salt).hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Returns ``False`` for malformed hashes instead of raising, so a
    broken configuration entry behaves like a wrong password.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    return hmac.compare_digest(_derive(plain_password, salt), stored_hash)
