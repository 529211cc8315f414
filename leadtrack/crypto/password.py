"""Password hashing for local accounts using Argon2id."""

import secrets

import argon2

PLACEHOLDER_SECRET_BYTES = 32

_hasher = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _hasher.hash(password)


def placeholder_password_hash() -> str:
    """Hash a random secret nobody knows.

    SSO-provisioned users never sign in with a password, but the users
    table still requires a hash.
    """
    return hash_password(secrets.token_urlsafe(PLACEHOLDER_SECRET_BYTES))


def verify_password(plain: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return _hasher.verify(hashed, plain)
    except (
        argon2.exceptions.VerifyMismatchError,
        argon2.exceptions.InvalidHashError,
    ):
        return False
