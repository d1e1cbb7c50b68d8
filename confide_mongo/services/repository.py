"""
Single entry point used by the host auth layer for all database interaction.
"""
from typing import Any, Mapping, Optional

from confide_mongo.database.databases.auth_db import UserFields
from confide_mongo.models.user import User
from confide_mongo.services.reminder_store import ReminderStore
from confide_mongo.services.user_directory import IdentityFields, UserDirectory
from confide_mongo.services.user_service import UserService


class ConfideMongoRepository:
    """Facade over the user directory, reminder store and user lifecycle."""

    def __init__(self, directory: UserDirectory, reminders: ReminderStore, users: UserService):
        self.directory = directory
        self.reminders = reminders
        self.users = users

    def model(self) -> type[User]:
        return self.directory.resolve_user_type()

    def confirm_by_code(self, code: str) -> bool:
        return self.directory.confirm_by_code(code)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.directory.find_by_email(email)

    def get_user_by_email_or_username(self, email_or_username: str) -> Optional[User]:
        return self.directory.find_by_email_or_username(email_or_username)

    def get_user_by_identity(
        self,
        credentials: Mapping[str, Any],
        identity_fields: IdentityFields = (UserFields.EMAIL,),
    ) -> Optional[User]:
        return self.directory.find_by_identity(credentials, identity_fields)

    def user_exists(self, user: User) -> int:
        """Number of stored users sharing the unsaved user's credentials."""
        return self.directory.count_duplicates(user)

    def get_password_reminders_count(self, token: str) -> int:
        return self.reminders.count_by_token(token)

    def get_email_by_reminder_token(self, token: str) -> str:
        return self.reminders.email_by_token(token)

    def delete_email_by_reminder_token(self, token: str) -> None:
        self.reminders.delete_by_token(token)

    def forgot_password(self, user: User) -> str:
        """Store a reminder for the user's email and return its token (no email sent)."""
        return self.reminders.issue_token(user.email)

    def validate(self, user: User) -> bool:
        """Validate a user, leaving failures in ``user.errors``."""
        return self.users.is_valid(user)

    def change_password(self, user: User, hashed_password: str) -> bool:
        """Store an already hashed password for the user."""
        updated = self.directory.change_password(user, hashed_password)
        if updated:
            user.password = hashed_password
        return updated

    def confirm_user(self, user: User) -> bool:
        return self.users.confirm(user)
