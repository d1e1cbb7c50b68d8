"""
Security utilities for password hashing and opaque token generation.
"""
import secrets
from typing import Optional, Protocol

from passlib.context import CryptContext

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REMINDER_TOKEN_BYTES = 32
CONFIRMATION_CODE_BYTES = 16


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def is_password_hash(value: Optional[str]) -> bool:
    """Check whether a stored value is already a hash known to the context."""
    if not value:
        return False
    return pwd_context.identify(value) is not None


def generate_reminder_token() -> str:
    """URL-safe token for password reset links."""
    return secrets.token_urlsafe(REMINDER_TOKEN_BYTES)


def generate_confirmation_code() -> str:
    """Hex code proving control of a registered email address."""
    return secrets.token_hex(CONFIRMATION_CODE_BYTES)


class PasswordHasher(Protocol):
    """Hashing collaborator used by the user lifecycle."""

    def make(self, plain_password: str) -> str: ...

    def check(self, plain_password: str, hashed_password: str) -> bool: ...

    def needs_hash(self, value: Optional[str]) -> bool: ...


class BcryptHasher:
    """PasswordHasher backed by the module bcrypt context."""

    def make(self, plain_password: str) -> str:
        return hash_password(plain_password)

    def check(self, plain_password: str, hashed_password: str) -> bool:
        return verify_password(plain_password, hashed_password)

    def needs_hash(self, value: Optional[str]) -> bool:
        return bool(value) and not is_password_hash(value)
