"""
User notifications raised by the user lifecycle.
"""
import logging
from typing import Any, Protocol

from confide_mongo.config import Settings
from confide_mongo.models.user import User
from confide_mongo.notifications.mailer import MailEnvelope, Mailer
from confide_mongo.notifications.translator import (
    ACCOUNT_CONFIRMATION_SUBJECT,
    PASSWORD_RESET_SUBJECT,
    Translator,
)

logger = logging.getLogger("confide_mongo.notifications")


class UserNotifier(Protocol):
    """Receives lifecycle events that should reach the user."""

    def account_created(self, user: User) -> None: ...

    def password_reset(self, user: User, token: str) -> None: ...


class NullNotifier:
    """Notifier that drops every event."""

    def account_created(self, user: User) -> None:
        return None

    def password_reset(self, user: User, token: str) -> None:
        return None


class MailNotifier:
    """Notifier sending the confirmation and password reset emails."""

    def __init__(self, mailer: Mailer, translator: Translator, settings: Settings):
        self.mailer = mailer
        self.translator = translator
        self.settings = settings

    def account_created(self, user: User) -> None:
        self._send(
            user,
            ACCOUNT_CONFIRMATION_SUBJECT,
            self.settings.email_account_confirmation,
            {"user": user},
        )

    def password_reset(self, user: User, token: str) -> None:
        self._send(
            user,
            PASSWORD_RESET_SUBJECT,
            self.settings.email_reset_password,
            {"user": user, "token": token},
        )

    def _send(self, user: User, subject_key: str, template: str, params: dict[str, Any]) -> None:
        subject = self.translator.get(subject_key)

        def configure(envelope: MailEnvelope) -> None:
            envelope.recipient = user.email
            envelope.subject = subject

        self.mailer.send(template, {**params, "app_url": self.settings.app_url}, configure)
        logger.info(f"Notified {user.email} with '{subject}'")
