"""Use case for loading a lead with its notes and call history."""

from sqlalchemy.orm import Session

from leaddesk.domain.entities import LeadDetail, User
from leaddesk.infrastructure.repositories import LeadRepository

from .validators import ensure_can_access


def get_lead_detail(session: Session, *, lead_id: str, user: User) -> LeadDetail:
    detail = LeadRepository(session).get_detail(lead_id)
    if detail is None:
        raise LookupError("Lead not found")
    ensure_can_access(detail.lead, user)
    return detail
