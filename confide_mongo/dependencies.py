"""
FastAPI dependencies resolving the adapter services bound by the provider.
"""
from typing import Annotated

from fastapi import Depends, Request

from confide_mongo.core.exceptions import ConfigurationError
from confide_mongo.provider import ConfideContainer
from confide_mongo.services.reminder_store import ReminderStore
from confide_mongo.services.repository import ConfideMongoRepository
from confide_mongo.services.user_directory import UserDirectory
from confide_mongo.services.user_service import UserService


def get_container(request: Request) -> ConfideContainer:
    """
    Dependency returning the container registered on the app.

    Raises:
        ConfigurationError: If ConfideMongoServiceProvider.register() was never called
    """
    container = getattr(request.app.state, "confide", None)
    if container is None:
        raise ConfigurationError("ConfideMongoServiceProvider is not registered on this app")
    return container


def get_repository(container: Annotated[ConfideContainer, Depends(get_container)]) -> ConfideMongoRepository:
    return container.repository


def get_user_directory(container: Annotated[ConfideContainer, Depends(get_container)]) -> UserDirectory:
    return container.directory


def get_reminder_store(container: Annotated[ConfideContainer, Depends(get_container)]) -> ReminderStore:
    return container.reminders


def get_user_service(container: Annotated[ConfideContainer, Depends(get_container)]) -> UserService:
    return container.users


# Type aliases for cleaner route signatures
Repository = Annotated[ConfideMongoRepository, Depends(get_repository)]
Users = Annotated[UserService, Depends(get_user_service)]
Reminders = Annotated[ReminderStore, Depends(get_reminder_store)]
Directory = Annotated[UserDirectory, Depends(get_user_directory)]
