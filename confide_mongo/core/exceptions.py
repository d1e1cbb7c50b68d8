"""
Typed errors raised by the adapter.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from pymongo.errors import DuplicateKeyError, PyMongoError

logger = logging.getLogger("confide_mongo.store")


class ConfideError(Exception):
    """Base class for adapter errors."""


class ConfigurationError(ConfideError):
    """The adapter is missing configuration it cannot run without."""


class StoreError(ConfideError):
    """The document store could not complete an operation."""


class DuplicateCredentialsError(StoreError):
    """A unique credential index rejected the write."""


class ValidationFailure(ConfideError):
    """
    A user record failed validation.

    ``errors`` maps the offending field (or ``duplicated``) to a message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(", ".join(f"{field}: {message}" for field, message in self.errors.items()))


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise driver failures inside the block as ``StoreError``."""
    try:
        yield
    except DuplicateKeyError as e:
        logger.info(f"Duplicate key during {operation}: {e}")
        raise DuplicateCredentialsError(f"{operation} rejected duplicate credentials") from e
    except PyMongoError as e:
        logger.error(f"Store error during {operation}: {e}")
        raise StoreError(f"{operation} failed: {e}") from e
