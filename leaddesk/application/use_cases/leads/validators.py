"""Validation helpers shared by the lead use cases."""

from __future__ import annotations

from sqlalchemy.orm import Session

from leaddesk.domain.entities import LEAD_PRIORITIES, LEAD_STATUSES, Lead, User
from leaddesk.infrastructure.repositories import LeadRepository, UserRepository


def validate_status(status: str) -> str:
    if status not in LEAD_STATUSES:
        raise ValueError(f"Unknown lead status '{status}'")
    return status


def validate_priority(priority: str | None) -> str | None:
    if priority in (None, ""):
        return None
    if priority not in LEAD_PRIORITIES:
        raise ValueError(f"Unknown lead priority '{priority}'")
    return priority


def resolve_assignee(session: Session, assignee_id: str | None) -> User | None:
    """Return the active user ``assignee_id`` refers to, or ``None`` when unassigned."""

    if not assignee_id:
        return None
    user = UserRepository(session).get(assignee_id)
    if user is None or not user.is_active:
        raise ValueError("Assigned user not found or inactive")
    return user


def get_lead_or_raise(session: Session, lead_id: str) -> Lead:
    lead = LeadRepository(session).get(lead_id)
    if lead is None:
        raise LookupError("Lead not found")
    return lead


def ensure_can_access(lead: Lead, user: User) -> None:
    if user.is_admin():
        return
    if lead.assigned_to != user.id:
        raise PermissionError("Lead is not assigned to you")
