"""Use case for assigning several leads to one telecaller at once."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from leaddesk.domain.entities import AssignmentNotification, Lead, User
from leaddesk.infrastructure.repositories import LeadRepository
from leaddesk.utils import now_in_app_timezone

from .validators import resolve_assignee


def bulk_assign_leads(
    session: Session,
    *,
    lead_ids: Sequence[str],
    assigned_to: str,
    assigned_by: User,
) -> list[Lead]:
    """Assign every lead in ``lead_ids`` to ``assigned_to``.

    No per-lead change events are published; the caller sends a single bulk
    notification instead.
    """

    if not assigned_by.is_admin():
        raise PermissionError("Only administrators can assign leads")

    unique_ids = list(dict.fromkeys(lead_id for lead_id in lead_ids if lead_id))
    if not unique_ids:
        raise ValueError("At least one lead is required")

    assignee = resolve_assignee(session, assigned_to)
    if assignee is None:
        raise ValueError("An assignee is required")

    repository = LeadRepository(session)
    leads = repository.list_by_ids(unique_ids)
    if len(leads) != len(unique_ids):
        found = {lead.id for lead in leads}
        missing = ", ".join(lead_id for lead_id in unique_ids if lead_id not in found)
        raise LookupError(f"Leads not found: {missing}")

    assigned_at = now_in_app_timezone()
    return repository.update_many(
        [
            replace(lead, assigned_to=assignee.id, assigned_by=assigned_by.id, assigned_at=assigned_at)
            for lead in leads
        ]
    )


def assignment_notifications(leads: Sequence[Lead]) -> list[AssignmentNotification]:
    return [
        AssignmentNotification(
            lead_id=lead.id,
            lead_name=lead.name,
            lead_phone=lead.phone,
            lead_email=lead.email,
            assigned_to=lead.assigned_to,
            assigned_by=lead.assigned_by,
            assigned_at=lead.assigned_at,
            priority=lead.priority,
            loan_amount=lead.loan_amount,
            loan_type=lead.loan_type,
        )
        for lead in leads
    ]
