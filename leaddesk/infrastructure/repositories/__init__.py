"""Repository implementations backed by SQLAlchemy sessions."""

from .lead_repository import LeadRepository
from .notification_history_repository import NotificationHistoryRepository
from .user_repository import UserRepository

__all__ = ["LeadRepository", "NotificationHistoryRepository", "UserRepository"]
