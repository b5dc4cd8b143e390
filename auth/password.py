"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a fixed work factor.  bcrypt only reads the first 72 bytes
of a secret, so longer passwords are cut to that length on both paths.
"""

from __future__ import annotations

import bcrypt

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 10)."""
    return bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_secret(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
