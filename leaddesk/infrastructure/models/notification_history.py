"""SQLAlchemy model for persisted notification history."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.sql import expression

from leaddesk.infrastructure.database import Base
from leaddesk.utils import now_in_app_naive_datetime

from ._ids import new_id


class NotificationHistoryModel(Base):
    """Audit entry of a notification sent to a user."""

    __tablename__ = "notification_history"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(160), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    read = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationHistoryModel"]
