"""
User model for authentication database.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from confide_mongo.database.databases.auth_db import UserFields


class User(BaseModel):
    """
    User document model for MongoDB auth_db.users collection.

    ``password``, ``password_confirmation`` and ``errors`` never appear in
    the model's outward serialization.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    username: Optional[str] = Field(None, description="Login name (alpha-dash)")
    email: Optional[str] = Field(None, description="Email address")
    password: Optional[str] = Field(
        None,
        exclude=True,
        description="Plain text until saved, bcrypt hash at rest",
    )
    password_confirmation: Optional[str] = Field(
        None,
        exclude=True,
        description="Transient confirmation value, never persisted",
    )
    confirmed: bool = Field(default=False, description="Whether the email was confirmed")
    confirmation_code: Optional[str] = Field(
        None,
        description="Generated once on first save",
    )
    remember_token: Optional[str] = Field(None, description="Remember-me session token")
    errors: dict[str, str] = Field(
        default_factory=dict,
        exclude=True,
        description="Validation errors from the last save attempt",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        """Build a user from a raw users-collection document."""
        return cls.model_validate(doc)

    def to_document(self) -> dict[str, Any]:
        """Persisted fields, with empty values left out."""
        doc = {
            UserFields.USERNAME: self.username or None,
            UserFields.EMAIL: self.email,
            UserFields.PASSWORD: self.password,
            UserFields.CONFIRMED: 1 if self.confirmed else 0,
            UserFields.CONFIRMATION_CODE: self.confirmation_code,
            UserFields.REMEMBER_TOKEN: self.remember_token,
        }
        return {key: value for key, value in doc.items() if value is not None}

    def cleared_fields(self) -> list[str]:
        """Optional persisted fields that are empty and must be unset on update."""
        doc = self.to_document()
        return [field for field in UserFields.CLEARABLE if field not in doc]

    @property
    def is_persisted(self) -> bool:
        return bool(self.id)

    # Authenticatable accessors

    @property
    def auth_identifier(self) -> Optional[str]:
        return self.id

    @property
    def auth_password(self) -> Optional[str]:
        return self.password

    def get_remember_token(self) -> Optional[str]:
        return self.remember_token

    def set_remember_token(self, value: Optional[str]) -> None:
        self.remember_token = value

    @staticmethod
    def remember_token_name() -> str:
        return UserFields.REMEMBER_TOKEN
