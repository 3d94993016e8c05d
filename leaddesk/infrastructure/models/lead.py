"""SQLAlchemy models for leads, their notes and call history."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from leaddesk.infrastructure.database import Base
from leaddesk.utils import now_in_app_naive_datetime

from ._ids import new_id


class LeadModel(Base):
    """Database representation of a lead."""

    __tablename__ = "leads"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True)
    phone = Column(String(30), nullable=False)
    company = Column(String(120), nullable=True)
    status = Column(String(30), nullable=False, default="new", index=True)
    priority = Column(String(20), nullable=True, default="medium")
    source = Column(String(60), nullable=True)
    notes = Column(Text, nullable=True)
    assigned_to = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    assigned_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    assigned_at = Column(DateTime(), nullable=True)
    loan_amount = Column(Numeric(14, 2), nullable=True)
    loan_type = Column(String(60), nullable=True)
    last_contacted = Column(DateTime(), nullable=True)
    next_follow_up = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


class LeadNoteModel(Base):
    """Note written by a user about a lead."""

    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=new_id)
    lead_id = Column(
        String(36), ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    note = Column(Text, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    user = relationship("UserModel", lazy="joined")


class CallLogModel(Base):
    """Call placed by a telecaller to a lead."""

    __tablename__ = "call_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    lead_id = Column(
        String(36), ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    call_type = Column(String(20), nullable=False)
    duration = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    user = relationship("UserModel", lazy="joined")


__all__ = ["CallLogModel", "LeadModel", "LeadNoteModel"]
