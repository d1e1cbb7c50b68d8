"""
User validation rules and response schemas.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, ValidationError, model_validator

from confide_mongo.models.user import User

ALPHA_DASH = r"^[A-Za-z0-9_-]+$"


class UserRules(BaseModel):
    """Field rules every user record must satisfy before a save."""
    username: str = Field(..., min_length=1, pattern=ALPHA_DASH, description="Alpha-dash login name")
    email: EmailStr = Field(..., description="User email address")
    confirmation_code: str = Field(..., min_length=1, description="Confirmation code")


class NewPasswordRules(UserRules):
    """Rules applied while the password is still plain text."""
    password: str = Field(..., min_length=4, max_length=11, description="Password (4 to 11 characters)")
    password_confirmation: Optional[str] = Field(None, description="Password confirmation")

    @model_validator(mode="after")
    def passwords_match(self) -> "NewPasswordRules":
        """Check if password and confirmation match."""
        if self.password_confirmation is not None and self.password != self.password_confirmation:
            raise ValueError("The password confirmation does not match.")
        return self


def validate_user_fields(user: User, check_password: bool = True) -> dict[str, str]:
    """
    Run the field rules against a user record.

    Args:
        user: Record to validate
        check_password: Apply the plain text password rules

    Returns:
        Mapping of field name to the first error message (empty when valid)
    """
    rules = NewPasswordRules if check_password else UserRules
    data = {
        "username": user.username,
        "email": user.email,
        "confirmation_code": user.confirmation_code,
        "password": user.password,
        "password_confirmation": user.password_confirmation,
    }
    try:
        rules.model_validate(data)
    except ValidationError as e:
        errors: dict[str, str] = {}
        for error in e.errors():
            # model-level errors carry no location
            field = str(error["loc"][0]) if error["loc"] else "password_confirmation"
            errors.setdefault(field, error["msg"])
        return errors
    return {}


class UserResponse(BaseModel):
    """User information response (excludes sensitive data)."""
    id: Optional[str] = Field(None, description="User ID")
    username: Optional[str] = Field(None, description="Login name")
    email: Optional[str] = Field(None, description="User email")
    confirmed: bool = Field(..., description="Whether the email was confirmed")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, email=user.email, confirmed=user.confirmed)
