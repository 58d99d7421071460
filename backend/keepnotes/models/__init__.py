from keepnotes.models.note import Note
from keepnotes.models.refresh_token import RefreshToken
from keepnotes.models.user import User

__all__ = [
    "Note",
    "RefreshToken",
    "User",
]
