"""ORM models registered on the shared declarative base."""

from .lead import CallLogModel, LeadModel, LeadNoteModel
from .notification_history import NotificationHistoryModel
from .user import UserModel

__all__ = [
    "CallLogModel",
    "LeadModel",
    "LeadNoteModel",
    "NotificationHistoryModel",
    "UserModel",
]
