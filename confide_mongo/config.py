"""
Adapter configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter settings from environment variables (prefixed ``CONFIDE_``)."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CONFIDE_", extra="ignore")

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017"
    database_name: str = "auth_db"
    users_collection: str = "users"
    reminders_collection: str = "password_reminders"

    # Dotted path of the user document class
    user_model: Optional[str] = "confide_mongo.models.user.User"

    # Unique indexes on email/username (closes the duplicate-check race)
    enforce_unique_credentials: bool = False

    # Password reminders older than this are removed by purge_expired()
    reminder_expire_minutes: int = 60

    # Email templates and links
    email_account_confirmation: str = "emails/account_confirmation.txt"
    email_reset_password: str = "emails/password_reset.txt"
    app_url: str = "http://localhost:8000"

    # SMTP transport
    mail_from: str = "no-reply@localhost"
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_starttls: bool = False

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
