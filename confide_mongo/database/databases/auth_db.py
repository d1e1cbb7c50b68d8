"""
Auth database document layout.
Field names of user identity, confirmation and password reminder documents.
Collection names are configured in Settings.
"""


class UserFields:
    """Field names of documents in the users collection."""
    ID = "_id"
    USERNAME = "username"
    EMAIL = "email"
    PASSWORD = "password"
    CONFIRMED = "confirmed"
    CONFIRMATION_CODE = "confirmation_code"
    REMEMBER_TOKEN = "remember_token"

    # Optional fields removed from the stored document when cleared
    CLEARABLE = (USERNAME, REMEMBER_TOKEN)


class ReminderFields:
    """Field names of documents in the password reminders collection."""
    EMAIL = "email"
    TOKEN = "token"
    CREATED_AT = "created_at"
