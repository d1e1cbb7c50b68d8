"""
Password reminder model for the password reminders collection.
"""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    """Naive UTC timestamp, the form pymongo returns from the server."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PasswordReminder(BaseModel):
    """
    A password reset request: one opaque token owned by one email.
    """
    email: str = Field(..., description="Owner of the reminder")
    token: str = Field(..., description="Opaque reset token")
    created_at: datetime = Field(default_factory=utcnow, description="Issue time (UTC)")

    def to_document(self) -> dict[str, Any]:
        return self.model_dump()
