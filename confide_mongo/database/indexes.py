"""
Index creation for the auth collections.
"""
import logging

from pymongo.database import Database

from confide_mongo.config import Settings
from confide_mongo.core.exceptions import store_errors
from confide_mongo.database.databases.auth_db import ReminderFields, UserFields

logger = logging.getLogger("confide_mongo.indexes")


def create_indexes(db: Database, settings: Settings) -> None:
    """
    Create the lookup indexes used by the directory and reminder store.

    With ``enforce_unique_credentials`` the email and username indexes are
    unique, so a concurrent duplicate insert fails in the store instead of
    slipping past the read-then-write duplicate check.
    """
    users = db[settings.users_collection]
    reminders = db[settings.reminders_collection]
    unique = settings.enforce_unique_credentials

    with store_errors("create indexes"):
        users.create_index(UserFields.EMAIL, unique=unique)
        users.create_index(UserFields.USERNAME, unique=unique, sparse=True)
        users.create_index(UserFields.CONFIRMATION_CODE)
        reminders.create_index(ReminderFields.TOKEN)
        reminders.create_index(ReminderFields.CREATED_AT)

    logger.info(f"Indexes ensured on '{db.name}' (unique credentials: {unique})")
