"""
confide-mongo - MongoDB persistence for users, confirmation codes and password reminders.
"""
from confide_mongo.config import Settings, get_settings
from confide_mongo.core.exceptions import (
    ConfideError,
    ConfigurationError,
    StoreError,
    ValidationFailure,
)
from confide_mongo.models import PasswordReminder, User
from confide_mongo.provider import ConfideContainer, ConfideMongoServiceProvider
from confide_mongo.services import (
    ConfideMongoRepository,
    ReminderStore,
    UserDirectory,
    UserService,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "ConfideError",
    "ConfigurationError",
    "StoreError",
    "ValidationFailure",
    "User",
    "PasswordReminder",
    "ConfideContainer",
    "ConfideMongoServiceProvider",
    "ConfideMongoRepository",
    "ReminderStore",
    "UserDirectory",
    "UserService",
]
