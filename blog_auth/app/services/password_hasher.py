"""
Password Hasher

bcrypt hashing and verification for account passwords.
"""

from functools import lru_cache
from typing import Optional

import bcrypt

from config import ApplicationConfig


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a plaintext password with bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor, defaults to BCRYPT_ROUNDS

    Returns:
        60-character bcrypt hash
    """
    cost = rounds or ApplicationConfig.BCRYPT_ROUNDS
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(cost)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of a plaintext password against a stored hash."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        return False


def burn_password_check() -> None:
    """Spend one bcrypt verification so missing users are not distinguishable by timing."""
    bcrypt.checkpw(
        b"not_the_dummy_password", _dummy_hash(ApplicationConfig.BCRYPT_ROUNDS)
    )


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))
