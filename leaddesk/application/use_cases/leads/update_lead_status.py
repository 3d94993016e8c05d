"""Use case for the lead status updater form."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from sqlalchemy.orm import Session

from leaddesk.domain.entities import (
    LEAD_STATUS_FOLLOW_UP,
    LEAD_STATUS_NOT_ELIGIBLE,
    Lead,
    User,
)
from leaddesk.infrastructure.notifications import ChangeFeed
from leaddesk.infrastructure.repositories import LeadRepository
from leaddesk.utils import now_in_app_timezone

from .events import publish_lead_update
from .validators import ensure_can_access, get_lead_or_raise, validate_status


def compose_status_notes(
    *, status: str, remarks: str | None, reason: str | None
) -> str | None:
    """Return the new ``notes`` value, or ``None`` to keep the existing one."""

    notes = remarks.strip() if remarks and remarks.strip() else None
    if status == LEAD_STATUS_NOT_ELIGIBLE and reason and reason.strip():
        reason_line = f"Reason for Not Eligible: {reason.strip()}"
        notes = f"{notes}\n\n{reason_line}" if notes else reason_line
    return notes


def update_lead_status(
    session: Session,
    feed: ChangeFeed | None,
    *,
    lead_id: str,
    user: User,
    status: str,
    remarks: str | None = None,
    reason: str | None = None,
    callback_at: datetime | None = None,
) -> Lead:
    validate_status(status)
    current = get_lead_or_raise(session, lead_id)
    ensure_can_access(current, user)

    changes: dict = {"status": status, "last_contacted": now_in_app_timezone()}
    notes = compose_status_notes(status=status, remarks=remarks, reason=reason)
    if notes is not None:
        changes["notes"] = notes
    if status == LEAD_STATUS_FOLLOW_UP and callback_at is not None:
        changes["next_follow_up"] = callback_at

    updated = LeadRepository(session).update(replace(current, **changes))
    publish_lead_update(feed, before=current, after=updated)
    return updated
