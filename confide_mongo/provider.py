"""
Service provider wiring the adapter into a FastAPI application.
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from pymongo.database import Database

from confide_mongo.config import Settings, get_settings
from confide_mongo.core.exceptions import StoreError, ValidationFailure
from confide_mongo.core.logging import setup_logging
from confide_mongo.core.security import BcryptHasher, PasswordHasher
from confide_mongo.database.connections import close_connections, get_mongo_client
from confide_mongo.database.indexes import create_indexes
from confide_mongo.models.user import User
from confide_mongo.notifications.mailer import Mailer, SmtpMailer
from confide_mongo.notifications.notifier import MailNotifier, UserNotifier
from confide_mongo.notifications.translator import CatalogTranslator, Translator
from confide_mongo.services.reminder_store import ReminderStore
from confide_mongo.services.repository import ConfideMongoRepository
from confide_mongo.services.user_directory import UserDirectory
from confide_mongo.services.user_service import UserService

logger = logging.getLogger("confide_mongo.provider")


@dataclass
class ConfideContainer:
    """Everything the provider binds, stored on ``app.state.confide``."""
    settings: Settings
    db: Database
    directory: UserDirectory
    reminders: ReminderStore
    users: UserService
    repository: ConfideMongoRepository


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation failed", "errors": exc.errors},
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "User store unavailable"},
    )


class ConfideMongoServiceProvider:
    """
    Builds the adapter's services and registers them on a FastAPI app.

    Every collaborator can be injected; the defaults are the shared Mongo
    client, SMTP mail, the bundled message catalog and bcrypt hashing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[MongoClient] = None,
        mailer: Optional[Mailer] = None,
        notifier: Optional[UserNotifier] = None,
        translator: Optional[Translator] = None,
        hasher: Optional[PasswordHasher] = None,
        user_model: Union[type[User], str, None] = None,
    ):
        self.settings = settings or get_settings()
        self.client = client
        self.mailer = mailer
        self.notifier = notifier
        self.translator = translator or CatalogTranslator()
        self.hasher = hasher or BcryptHasher()
        self.user_model = user_model

    def build(self) -> ConfideContainer:
        """Construct the directory, reminder store, lifecycle and repository."""
        client = self.client if self.client is not None else get_mongo_client()
        db = client[self.settings.database_name]

        notifier = self.notifier
        if notifier is None:
            mailer = self.mailer or SmtpMailer(self.settings)
            notifier = MailNotifier(mailer, self.translator, self.settings)

        directory = UserDirectory(db, self.settings, model=self.user_model)
        reminders = ReminderStore(db, self.settings)
        users = UserService(directory, reminders, notifier, self.hasher, self.translator)
        repository = ConfideMongoRepository(directory, reminders, users)

        return ConfideContainer(
            settings=self.settings,
            db=db,
            directory=directory,
            reminders=reminders,
            users=users,
            repository=repository,
        )

    def register(self, app: FastAPI) -> ConfideContainer:
        """Bind a container to the app and install the error handlers."""
        setup_logging(self.settings.log_level)

        container = self.build()
        app.state.confide = container
        app.add_exception_handler(ValidationFailure, validation_failure_handler)
        app.add_exception_handler(StoreError, store_error_handler)

        logger.info(f"Confide repository registered on database '{self.settings.database_name}'")
        return container

    def boot(self, container: ConfideContainer) -> None:
        """Create the collection indexes."""
        create_indexes(container.db, self.settings)

    def shutdown(self) -> None:
        """Close the shared client (an injected client is left to its owner)."""
        if self.client is None:
            close_connections()

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        """
        FastAPI lifespan: register, create indexes, and close on shutdown.

        Usage:
            provider = ConfideMongoServiceProvider()
            app = FastAPI(lifespan=provider.lifespan)
        """
        container = self.register(app)
        try:
            self.boot(container)
        except StoreError as e:
            logger.warning(f"Index creation skipped: {e}")

        try:
            yield
        finally:
            self.shutdown()
