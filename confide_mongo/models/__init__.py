"""
Pydantic models for database documents.
"""
from confide_mongo.models.reminder import PasswordReminder
from confide_mongo.models.user import User

__all__ = [
    "User",
    "PasswordReminder",
]
