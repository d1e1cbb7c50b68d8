"""
Core module - Security, errors, and logging utilities.
"""
from confide_mongo.core.exceptions import (
    ConfideError,
    ConfigurationError,
    DuplicateCredentialsError,
    StoreError,
    ValidationFailure,
)
from confide_mongo.core.security import (
    BcryptHasher,
    PasswordHasher,
    generate_confirmation_code,
    generate_reminder_token,
    hash_password,
    verify_password,
)

__all__ = [
    "ConfideError",
    "ConfigurationError",
    "DuplicateCredentialsError",
    "StoreError",
    "ValidationFailure",
    "BcryptHasher",
    "PasswordHasher",
    "generate_confirmation_code",
    "generate_reminder_token",
    "hash_password",
    "verify_password",
]
