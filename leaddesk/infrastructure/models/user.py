"""SQLAlchemy model for the users table."""

from sqlalchemy import JSON, Boolean, Column, DateTime, String
from sqlalchemy.sql import expression

from leaddesk.infrastructure.database import Base
from leaddesk.utils import now_in_app_naive_datetime

from ._ids import new_id


class UserModel(Base):
    """Database representation of an admin or telecaller."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="telecaller", index=True)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    notification_preferences = Column(JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserModel"]
