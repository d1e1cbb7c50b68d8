"""
Global test fixtures for confide-mongo.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock)
- Adapter settings and wired services
- Recording notifier and mailer doubles
- Test user factories
"""

from typing import Any, Generator

import pytest


# =============================================================================
# Settings
# =============================================================================

@pytest.fixture
def settings():
    """Adapter settings pointing at the test database."""
    from confide_mongo.config import Settings

    return Settings(
        _env_file=None,
        mongo_uri="mongodb://localhost:27017",
        database_name="auth_db_test",
        app_url="http://testserver",
        mail_from="no-reply@sample.com",
        log_level="DEBUG",
    )


# =============================================================================
# MongoDB Fixtures
# =============================================================================

@pytest.fixture
def mock_mongo_client():
    """Create a mongomock client for testing."""
    try:
        import mongomock
        client = mongomock.MongoClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock not installed")


@pytest.fixture
def mock_auth_db(mock_mongo_client, settings):
    """Get mock auth database."""
    return mock_mongo_client[settings.database_name]


# =============================================================================
# Collaborator Doubles
# =============================================================================

class RecordingNotifier:
    """UserNotifier double remembering every event it receives."""

    def __init__(self):
        self.created: list = []
        self.resets: list = []

    def account_created(self, user) -> None:
        self.created.append(user)

    def password_reset(self, user, token: str) -> None:
        self.resets.append((user, token))


class RecordingMailer:
    """Mailer double that fills the envelope and keeps it with the params."""

    def __init__(self):
        self.sent: list = []

    def send(self, template: str, params: dict[str, Any], configure) -> None:
        from confide_mongo.notifications.mailer import MailEnvelope

        envelope = MailEnvelope()
        configure(envelope)
        self.sent.append((template, params, envelope))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def translator():
    from confide_mongo.notifications.translator import CatalogTranslator
    return CatalogTranslator()


@pytest.fixture
def hasher():
    from confide_mongo.core.security import BcryptHasher
    return BcryptHasher()


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def directory(mock_auth_db, settings):
    from confide_mongo.services.user_directory import UserDirectory
    return UserDirectory(mock_auth_db, settings)


@pytest.fixture
def reminders(mock_auth_db, settings):
    from confide_mongo.services.reminder_store import ReminderStore
    return ReminderStore(mock_auth_db, settings)


@pytest.fixture
def user_service(directory, reminders, notifier, hasher, translator):
    from confide_mongo.services.user_service import UserService
    return UserService(directory, reminders, notifier, hasher, translator)


@pytest.fixture
def repository(directory, reminders, user_service):
    from confide_mongo.services.repository import ConfideMongoRepository
    return ConfideMongoRepository(directory, reminders, user_service)


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def user_factory():
    """Build unsaved users; keyword arguments override the defaults."""
    from confide_mongo.models.user import User

    def _make(**overrides) -> User:
        data = {
            "username": "Bob",
            "email": "bob@sample.com",
            "password": "secret1",
            "password_confirmation": "secret1",
        }
        data.update(overrides)
        return User(**data)

    return _make


@pytest.fixture
def stored_user(mock_auth_db, settings) -> Generator[dict, None, None]:
    """Insert a confirmed user document directly and yield it."""
    doc = {
        "username": "Bob",
        "email": "bob@sample.com",
        "password": "$2b$12$KIXQJQbq4Wq9r3hY6Z1pUOZC6iS5B6sK0Q1Q2Yw3vY0C1e2f3g4h5",
        "confirmed": 1,
        "confirmation_code": "abc123",
    }
    mock_auth_db[settings.users_collection].insert_one(doc)
    yield doc
