"""
Password hashing helpers.

Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a per‑password random
salt.  The stored form is ``"<iterations>$<salt hex>$<hash hex>"`` so a
hash keeps verifying after ``settings.password_hash_iterations`` changes;
the raw password is never persisted.  Hashes in the older two‑part
``"<salt hex>$<hash hex>"`` form are read with
``LEGACY_ITERATIONS``.
"""

import hashlib
import hmac
import os
from typing import Optional

from .config import settings

SALT_BYTES = 16
LEGACY_ITERATIONS = 100_000


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    iterations : Optional[int]
        Overrides ``settings.password_hash_iterations``.

    Returns
    -------
    str
        Iteration count, salt and hash (both hex) joined with ``$``.
    """
    iterations = iterations or settings.password_hash_iterations
    salt = os.urandom(SALT_BYTES)
    dk = _derive(password, salt, iterations)
    return f"{iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check ``plain_password`` against a stored hash.

    The iteration count is taken from the hash itself.  Malformed or
    missing hashes never match.  The digest comparison is constant time.
    """
    if not hashed_password:
        return False
    parts = hashed_password.split("$")
    try:
        if len(parts) == 3:
            iterations = int(parts[0])
            salt_hex, hash_hex = parts[1], parts[2]
        elif len(parts) == 2:
            iterations = LEGACY_ITERATIONS
            salt_hex, hash_hex = parts
        else:
            return False
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    if iterations < 1:
        return False
    dk = _derive(plain_password, salt, iterations)
    return hmac.compare_digest(dk, stored_hash)
