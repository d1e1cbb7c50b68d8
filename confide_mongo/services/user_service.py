"""
User lifecycle: validation, save hooks, confirmation and password changes.
"""
import logging
from typing import Any, Mapping

from confide_mongo.core.exceptions import DuplicateCredentialsError, ValidationFailure
from confide_mongo.core.security import PasswordHasher, generate_confirmation_code
from confide_mongo.database.databases.auth_db import UserFields
from confide_mongo.models.user import User
from confide_mongo.notifications.notifier import UserNotifier
from confide_mongo.notifications.translator import DUPLICATED_CREDENTIALS, Translator
from confide_mongo.schemas.user import validate_user_fields
from confide_mongo.services.reminder_store import ReminderStore
from confide_mongo.services.user_directory import IdentityFields, UserDirectory

logger = logging.getLogger("confide_mongo.lifecycle")

DUPLICATED_ERROR_KEY = "duplicated"


class UserService:
    """Service for user lifecycle operations."""

    def __init__(
        self,
        directory: UserDirectory,
        reminders: ReminderStore,
        notifier: UserNotifier,
        hasher: PasswordHasher,
        translator: Translator,
    ):
        self.directory = directory
        self.reminders = reminders
        self.notifier = notifier
        self.hasher = hasher
        self.translator = translator

    # ==================== Validation ====================

    def ensure_valid(self, user: User) -> None:
        """
        Validate a user before it is written.

        New users (no id yet) are also checked for duplicated credentials.

        Raises:
            ValidationFailure: With every failing field mapped to a message
        """
        # stored hashes are not held to the plain text password rules
        plain_password = not user.password or self.hasher.needs_hash(user.password)
        errors = validate_user_fields(user, check_password=plain_password)

        if not errors and not user.is_persisted:
            if self.directory.count_duplicates(user):
                errors[DUPLICATED_ERROR_KEY] = self.translator.get(DUPLICATED_CREDENTIALS)

        if errors:
            raise ValidationFailure(errors)

    def is_valid(self, user: User) -> bool:
        """Validate and record the outcome in ``user.errors``."""
        try:
            self.ensure_valid(user)
        except ValidationFailure as e:
            user.errors = e.errors
            logger.info(f"User {user.email!r} failed validation: {sorted(e.errors)}")
            return False
        user.errors = {}
        return True

    # ==================== Save ====================

    def before_save(self, user: User) -> None:
        """Generate the confirmation code of a new user (only once)."""
        if not user.is_persisted and not user.confirmation_code:
            user.confirmation_code = generate_confirmation_code()

    def after_save(self, user: User, created: bool) -> None:
        """Send the confirmation email to users created unconfirmed."""
        if created and not user.confirmed:
            self.notifier.account_created(user)

    def save(self, user: User, force: bool = False) -> bool:
        """
        Validate and persist a user, then run the after-save hook.

        Args:
            user: User to insert (no id) or update (has id)
            force: Skip validation

        Returns:
            True if the user was written, False if validation failed
            (details in ``user.errors``) or no stored user has its id
        """
        self.before_save(user)

        if not force and not self.is_valid(user):
            return False

        if self.hasher.needs_hash(user.password):
            user.password = self.hasher.make(user.password)
        user.password_confirmation = None

        created = not user.is_persisted
        written = True
        try:
            if created:
                self.directory.insert(user)
            else:
                written = self.directory.update(user)
        except DuplicateCredentialsError:
            user.errors = {DUPLICATED_ERROR_KEY: self.translator.get(DUPLICATED_CREDENTIALS)}
            return False

        if not written:
            logger.warning(f"User {user.id} is not stored; nothing was updated")
            return False

        logger.info(f"Saved user {user.id} ({'created' if created else 'updated'})")
        self.after_save(user, created)
        return True

    # ==================== Account actions ====================

    def confirm(self, user: User) -> bool:
        """Mark the user as confirmed, updating only that field."""
        return self.directory.confirm(user)

    def forgot_password(self, user: User) -> str:
        """
        Issue a password reminder for the user and email the reset link.

        Returns:
            The issued reminder token
        """
        token = self.reminders.issue_token(user.email)
        self.notifier.password_reset(user, token)
        return token

    def reset_password(self, user: User, password: str, password_confirmation: str) -> bool:
        """
        Replace the user's password when both values match.

        Returns:
            False on mismatch (nothing is written), otherwise the update result
        """
        if password != password_confirmation:
            return False

        hashed = self.hasher.make(password)
        updated = self.directory.change_password(user, hashed)
        if updated:
            user.password = hashed
        return updated

    # ==================== Credential checks ====================

    def check_user_exists(
        self,
        credentials: Mapping[str, Any],
        identity_fields: IdentityFields = (UserFields.USERNAME, UserFields.EMAIL),
    ) -> bool:
        return self.directory.find_by_identity(credentials, identity_fields) is not None

    def is_confirmed(
        self,
        credentials: Mapping[str, Any],
        identity_fields: IdentityFields = (UserFields.USERNAME, UserFields.EMAIL),
    ) -> bool:
        user = self.directory.find_by_identity(credentials, identity_fields)
        return user is not None and user.confirmed
