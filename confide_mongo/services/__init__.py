"""
Service layer for user lookup, password reminders and the user lifecycle.
"""
from confide_mongo.services.reminder_store import ReminderStore
from confide_mongo.services.repository import ConfideMongoRepository
from confide_mongo.services.user_directory import (
    UserDirectory,
    build_duplicate_query,
    build_identity_query,
)
from confide_mongo.services.user_service import UserService

__all__ = [
    "ConfideMongoRepository",
    "ReminderStore",
    "UserDirectory",
    "UserService",
    "build_duplicate_query",
    "build_identity_query",
]
