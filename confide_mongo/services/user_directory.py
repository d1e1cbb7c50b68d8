"""
User directory: lookups, duplicate checks and partial updates on the users collection.
"""
import importlib
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from bson import ObjectId
from pymongo.database import Database

from confide_mongo.config import Settings
from confide_mongo.core.exceptions import ConfigurationError, store_errors
from confide_mongo.database.databases.auth_db import UserFields
from confide_mongo.models.user import User

logger = logging.getLogger("confide_mongo.users")

IdentityFields = Union[str, Sequence[str]]


def build_identity_query(
    credentials: Mapping[str, Any],
    identity_fields: IdentityFields = (UserFields.EMAIL,),
) -> dict[str, list[dict[str, Any]]]:
    """
    Build an ``$or`` query with one clause per identity field present in credentials.

    Fields missing from ``credentials`` (or set to None) are skipped rather
    than matched against null. Clause order follows ``identity_fields``.

    Args:
        credentials: Values submitted by the caller (e.g. a login form)
        identity_fields: Field name or ordered list of field names

    Returns:
        Query of the form ``{"$or": [{field: value}, ...]}``
    """
    if isinstance(identity_fields, str):
        identity_fields = [identity_fields]

    clauses = [
        {field: credentials[field]}
        for field in identity_fields
        if credentials.get(field) is not None
    ]
    return {"$or": clauses}


def build_duplicate_query(user: User) -> dict[str, Any]:
    """Query matching records that already use the user's username or email."""
    if user.username:
        return {
            "$or": [
                {UserFields.USERNAME: user.username},
                {UserFields.EMAIL: user.email},
            ]
        }
    return {UserFields.EMAIL: user.email}


def _object_id(value: Optional[str]) -> Any:
    if value is not None and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def _import_model(path: str) -> Any:
    module_path, _, name = path.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"User model '{path}' is not a dotted import path")
    try:
        module = importlib.import_module(module_path)
        return getattr(module, name)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"User model '{path}' could not be imported") from e


class UserDirectory:
    """Stateless facade over the users collection."""

    def __init__(
        self,
        db: Database,
        settings: Settings,
        model: Union[type[User], str, None] = None,
    ):
        """
        Initialize with the auth database.

        Args:
            db: Database holding the users collection
            settings: Adapter settings (collection name, user model path)
            model: User class or dotted path; overrides ``settings.user_model``
        """
        self.db = db
        self.settings = settings
        self.users = db[settings.users_collection]
        self.model = model

    def resolve_user_type(self) -> type[User]:
        """
        Return the configured user document class.

        Raises:
            ConfigurationError: If no model is configured or it cannot be imported
        """
        model = self.model if self.model is not None else self.settings.user_model
        if not model:
            raise ConfigurationError("User model not specified (set CONFIDE_USER_MODEL)")

        if isinstance(model, str):
            model = _import_model(model)

        if not (isinstance(model, type) and issubclass(model, User)):
            raise ConfigurationError(f"User model {model!r} is not a User subclass")
        return model

    def _first(self, query: dict[str, Any], operation: str) -> Optional[User]:
        model = self.resolve_user_type()
        with store_errors(operation):
            doc = self.users.find_one(query)
        if not doc:
            return None
        return model.from_document(doc)

    # ==================== Lookups ====================

    def find_by_confirmation_code(self, code: str) -> Optional[User]:
        return self._first({UserFields.CONFIRMATION_CODE: code}, "find user by confirmation code")

    def confirm_by_code(self, code: str) -> bool:
        """
        Confirm the user owning a confirmation code.

        Returns:
            Result of the confirm action, or False when no user has the code
        """
        user = self.find_by_confirmation_code(code)
        if user is None:
            logger.info("Confirmation code did not match any user")
            return False
        return self.confirm(user)

    def find_by_email(self, email: str) -> Optional[User]:
        return self._first({UserFields.EMAIL: email}, "find user by email")

    def find_by_identity(
        self,
        credentials: Mapping[str, Any],
        identity_fields: IdentityFields = (UserFields.EMAIL,),
    ) -> Optional[User]:
        """
        Find a user matching any identity field present in credentials.

        When none of the identity fields is present no query is issued and
        None is returned: an empty ``$or`` is rejected by MongoDB.
        """
        query = build_identity_query(credentials, identity_fields)
        if not query["$or"]:
            logger.debug(f"No identity fields of {identity_fields} in credentials")
            return None
        return self._first(query, "find user by identity")

    def find_by_email_or_username(self, value: str) -> Optional[User]:
        credentials = {UserFields.EMAIL: value, UserFields.USERNAME: value}
        return self.find_by_identity(credentials, [UserFields.EMAIL, UserFields.USERNAME])

    def count_duplicates(self, user: User) -> int:
        """
        Count stored users sharing the (unsaved) user's username or email.

        The count and a later insert are not atomic; see
        ``Settings.enforce_unique_credentials``.
        """
        query = build_duplicate_query(user)
        with store_errors("count duplicate credentials"):
            count = self.users.count_documents(query)
        if count:
            logger.info(f"Found {count} user(s) with duplicated credentials")
        return count

    # ==================== Writes ====================

    def insert(self, user: User) -> str:
        """Insert a new user and assign the store identifier to it."""
        with store_errors("insert user"):
            result = self.users.insert_one(user.to_document())
        user.id = str(result.inserted_id)
        return user.id

    def update(self, user: User) -> bool:
        """
        Write a stored user's fields, unsetting optional fields it cleared.

        Returns:
            False when no stored user has the user's id
        """
        changes: dict[str, Any] = {"$set": user.to_document()}
        cleared = user.cleared_fields()
        if cleared:
            changes["$unset"] = {field: "" for field in cleared}

        with store_errors("update user"):
            result = self.users.update_one({UserFields.ID: _object_id(user.id)}, changes)
        return result.matched_count > 0

    def confirm(self, user: User) -> bool:
        """Set only the confirmed flag of a stored user (in memory once stored)."""
        with store_errors("confirm user"):
            result = self.users.update_one(
                {UserFields.ID: _object_id(user.id)},
                {"$set": {UserFields.CONFIRMED: 1}},
            )
        if result.matched_count == 0:
            return False
        user.confirmed = True
        return True

    def change_password(self, user: User, hashed_password: str) -> bool:
        """Set only the password hash of a stored user."""
        with store_errors("change password"):
            result = self.users.update_one(
                {UserFields.ID: _object_id(user.id)},
                {"$set": {UserFields.PASSWORD: hashed_password}},
            )
        return result.matched_count > 0
