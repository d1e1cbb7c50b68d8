"""
Message catalog for email subjects and validation alerts.
"""
from typing import Mapping, Optional, Protocol

DUPLICATED_CREDENTIALS = "confide.alerts.duplicated_credentials"
ACCOUNT_CONFIRMATION_SUBJECT = "confide.email.account_confirmation.subject"
PASSWORD_RESET_SUBJECT = "confide.email.password_reset.subject"

DEFAULT_MESSAGES = {
    DUPLICATED_CREDENTIALS: "Username or email already in use. Please choose different credentials.",
    ACCOUNT_CONFIRMATION_SUBJECT: "Account Confirmation",
    PASSWORD_RESET_SUBJECT: "Password Reset",
}


class Translator(Protocol):
    """Localized message lookup."""

    def get(self, key: str) -> str: ...


class CatalogTranslator:
    """Translator over an in-memory catalog; unknown keys come back unchanged."""

    def __init__(self, messages: Optional[Mapping[str, str]] = None):
        self.messages = {**DEFAULT_MESSAGES, **(messages or {})}

    def get(self, key: str) -> str:
        return self.messages.get(key, key)
