"""
Password reminder store: issue, resolve and delete password reset tokens.
"""
import logging
from datetime import timedelta
from typing import Optional

from pymongo.database import Database

from confide_mongo.config import Settings
from confide_mongo.core.exceptions import store_errors
from confide_mongo.core.security import generate_reminder_token
from confide_mongo.database.databases.auth_db import ReminderFields
from confide_mongo.models.reminder import PasswordReminder, utcnow

logger = logging.getLogger("confide_mongo.reminders")


class ReminderStore:
    """Stateless wrapper around the password reminders collection."""

    def __init__(self, db: Database, settings: Settings):
        """Initialize with the auth database."""
        self.db = db
        self.settings = settings
        self.reminders = db[settings.reminders_collection]

    def issue_token(self, email: str) -> str:
        """
        Generate a reset token for an email and store it.

        Args:
            email: Email of the user asking for a reset

        Returns:
            The new token
        """
        reminder = PasswordReminder(email=email, token=generate_reminder_token())
        with store_errors("issue reminder token"):
            self.reminders.insert_one(reminder.to_document())
        logger.debug(f"Issued password reminder for {email}")
        return reminder.token

    def count_by_token(self, token: str) -> int:
        with store_errors("count reminders"):
            return self.reminders.count_documents({ReminderFields.TOKEN: token})

    def email_by_token(self, token: str) -> str:
        """Email owning a token, or an empty string when the token is unknown."""
        with store_errors("resolve reminder token"):
            doc = self.reminders.find_one(
                {ReminderFields.TOKEN: token},
                {ReminderFields.EMAIL: 1, "_id": 0},
            )
        if not doc:
            return ""
        return doc.get(ReminderFields.EMAIL, "")

    def delete_by_token(self, token: str) -> None:
        """Delete a reminder. Unknown tokens are ignored."""
        with store_errors("delete reminder token"):
            result = self.reminders.delete_one({ReminderFields.TOKEN: token})
        logger.debug(f"Deleted {result.deleted_count} password reminder(s)")

    def purge_expired(self, max_age: Optional[timedelta] = None) -> int:
        """
        Delete reminders older than ``max_age``.

        Lookups never apply the expiry themselves; the host schedules this.

        Args:
            max_age: Age limit, defaults to ``settings.reminder_expire_minutes``

        Returns:
            Number of deleted reminders
        """
        if max_age is None:
            max_age = timedelta(minutes=self.settings.reminder_expire_minutes)
        cutoff = utcnow() - max_age

        with store_errors("purge expired reminders"):
            result = self.reminders.delete_many({ReminderFields.CREATED_AT: {"$lt": cutoff}})

        if result.deleted_count:
            logger.info(f"Purged {result.deleted_count} expired password reminder(s)")
        return result.deleted_count
