"""Utilities for password hashing and verification."""

from __future__ import annotations

import hashlib
import secrets

import bcrypt


def hash_password(password: str) -> str:
    """Hash plain text password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def generate_token_value(num_bytes: int) -> str:
    """Return a url-safe random string carrying ``num_bytes`` of entropy."""
    return secrets.token_urlsafe(num_bytes)


def hash_token_value(value: str) -> str:
    """SHA-256 digest used to index refresh tokens without storing them in clear."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


__all__ = ["hash_password", "verify_password", "generate_token_value", "hash_token_value"]
