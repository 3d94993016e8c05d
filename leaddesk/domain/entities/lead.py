"""Domain entities describing leads and their activity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

LEAD_STATUSES: tuple[str, ...] = (
    "new",
    "contacted",
    "Interested",
    "Documents_Sent",
    "Login",
    "Disbursed",
    "Not_Interested",
    "follow_up",
    "not_eligible",
    "nr",
    "self_employed",
)
LEAD_STATUS_FOLLOW_UP = "follow_up"
LEAD_STATUS_NOT_ELIGIBLE = "not_eligible"

LEAD_PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "urgent")


@dataclass
class Lead:
    """A sales lead tracked by the dashboard."""

    id: str | None
    name: str
    phone: str
    email: str | None = None
    company: str | None = None
    status: str = "new"
    priority: str | None = "medium"
    source: str | None = None
    notes: str | None = None
    assigned_to: str | None = None
    assigned_by: str | None = None
    assigned_at: datetime | None = None
    loan_amount: Decimal | None = None
    loan_type: str | None = None
    last_contacted: datetime | None = None
    next_follow_up: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class LeadNote:
    """Free-form note attached to a lead."""

    id: str | None
    lead_id: str
    user_id: str | None
    note: str
    author_name: str | None = None
    created_at: datetime | None = None


@dataclass
class CallLog:
    """A call made to (or received from) a lead."""

    id: str | None
    lead_id: str
    user_id: str | None
    call_type: str
    duration: int = 0
    notes: str | None = None
    caller_name: str | None = None
    created_at: datetime | None = None


@dataclass
class LeadDetail:
    """Lead together with its notes and call history, newest first."""

    lead: Lead
    notes: list[LeadNote]
    call_logs: list[CallLog]


__all__ = [
    "CallLog",
    "LEAD_PRIORITIES",
    "LEAD_STATUSES",
    "LEAD_STATUS_FOLLOW_UP",
    "LEAD_STATUS_NOT_ELIGIBLE",
    "Lead",
    "LeadDetail",
    "LeadNote",
]
