"""
Validation rules and response schemas.
"""
from confide_mongo.schemas.user import (
    NewPasswordRules,
    UserResponse,
    UserRules,
    validate_user_fields,
)

__all__ = [
    "NewPasswordRules",
    "UserResponse",
    "UserRules",
    "validate_user_fields",
]
