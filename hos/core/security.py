#!/usr/bin/env python3
"""
security.py
--------------------
Password hashing for member credentials.

Hashes are opaque strings produced by werkzeug; the model layer only ever
stores them and compares a plaintext against them.
"""
from werkzeug.security import check_password_hash, generate_password_hash

HASH_METHOD = "pbkdf2:sha256"
SALT_LENGTH = 16


def hash_password(plaintext: str) -> str:
    """Return a salted hash for storage in ``members.password``."""
    return generate_password_hash(plaintext, method=HASH_METHOD, salt_length=SALT_LENGTH)


def verify_password(plaintext: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash."""
    if not plaintext or not hashed:
        return False
    return check_password_hash(hashed, plaintext)
