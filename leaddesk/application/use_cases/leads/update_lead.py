"""Use case for the admin lead edit form."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from leaddesk.domain.entities import Lead, User
from leaddesk.infrastructure.notifications import ChangeFeed
from leaddesk.infrastructure.repositories import LeadRepository
from leaddesk.utils import now_in_app_timezone

from .events import publish_lead_update
from .validators import (
    get_lead_or_raise,
    resolve_assignee,
    validate_priority,
    validate_status,
)

EDITABLE_FIELDS = (
    "name",
    "email",
    "phone",
    "company",
    "status",
    "priority",
    "assigned_to",
    "source",
    "notes",
)


def update_lead(
    session: Session,
    feed: ChangeFeed | None,
    *,
    lead_id: str,
    changes: Mapping[str, Any],
    updated_by: User,
) -> Lead:
    """Apply the submitted form values to the lead and publish the change.

    Only keys present in ``changes`` are touched. An empty ``assigned_to``
    unassigns the lead.
    """

    if not updated_by.is_admin():
        raise PermissionError("Only administrators can edit leads")

    current = get_lead_or_raise(session, lead_id)
    values = {key: changes[key] for key in EDITABLE_FIELDS if key in changes}

    if "name" in values and not (values["name"] or "").strip():
        raise ValueError("Lead name is required")
    if "phone" in values and not (values["phone"] or "").strip():
        raise ValueError("Lead phone is required")
    if "status" in values:
        validate_status(values["status"])
    if "priority" in values:
        values["priority"] = validate_priority(values["priority"])

    if "assigned_to" in values:
        assignee = resolve_assignee(session, values["assigned_to"] or None)
        values["assigned_to"] = assignee.id if assignee else None
        if values["assigned_to"] != current.assigned_to:
            if assignee is None:
                values["assigned_by"] = None
                values["assigned_at"] = None
            else:
                values["assigned_by"] = updated_by.id
                values["assigned_at"] = now_in_app_timezone()

    updated = LeadRepository(session).update(replace(current, **values))
    publish_lead_update(feed, before=current, after=updated)
    return updated
