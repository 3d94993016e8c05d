"""API routes for viewing and updating leads."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from leaddesk.application.use_cases.leads import (
    assignment_notifications,
    bulk_assign_leads as bulk_assign_leads_uc,
    get_lead_detail as get_lead_detail_uc,
    update_lead as update_lead_uc,
    update_lead_status as update_lead_status_uc,
)
from leaddesk.application.use_cases.notifications import LeadAssignmentNotifier
from leaddesk.domain.entities import User
from leaddesk.infrastructure.database import get_db
from leaddesk.infrastructure.notifications import ChangeFeed
from leaddesk.interfaces.api.dependencies import (
    get_change_feed,
    get_current_active_user,
    get_lead_assignment_notifier,
    require_admin,
)
from leaddesk.interfaces.api.schemas import (
    BulkAssignRequest,
    BulkAssignResponse,
    LeadDetailRead,
    LeadRead,
    LeadStatusUpdateRequest,
    LeadUpdateRequest,
)

router = APIRouter(prefix="/leads", tags=["leads"])
logger = logging.getLogger(__name__)


def _translate_error(exc: Exception) -> HTTPException:
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, LookupError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/bulk-assign", response_model=BulkAssignResponse)
def bulk_assign_leads(
    payload: BulkAssignRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    notifier: LeadAssignmentNotifier = Depends(get_lead_assignment_notifier),
) -> BulkAssignResponse:
    """Assign several leads to one user and send a single summary notification."""

    try:
        leads = bulk_assign_leads_uc(
            db,
            lead_ids=payload.lead_ids,
            assigned_to=payload.assigned_to,
            assigned_by=current_user,
        )
    except (PermissionError, LookupError, ValueError) as exc:
        raise _translate_error(exc) from exc

    background_tasks.add_task(
        notifier.notify_bulk_assignment,
        assignment_notifications(leads),
        payload.assigned_to,
    )
    logger.info(
        "User %s assigned %s leads to %s", current_user.id, len(leads), payload.assigned_to
    )
    return BulkAssignResponse(
        assigned_to=payload.assigned_to,
        count=len(leads),
        leads=[LeadRead.model_validate(lead) for lead in leads],
    )


@router.get("/{lead_id}", response_model=LeadDetailRead)
def read_lead(
    lead_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> LeadDetailRead:
    """Return the lead with its notes and call history."""

    try:
        detail = get_lead_detail_uc(db, lead_id=lead_id, user=current_user)
    except (PermissionError, LookupError) as exc:
        raise _translate_error(exc) from exc
    return LeadDetailRead.model_validate(detail)


@router.put("/{lead_id}", response_model=LeadRead)
def update_lead(
    lead_id: str,
    payload: LeadUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    feed: ChangeFeed = Depends(get_change_feed),
) -> LeadRead:
    """Save the admin lead form."""

    try:
        lead = update_lead_uc(
            db,
            feed,
            lead_id=lead_id,
            changes=payload.model_dump(exclude_unset=True),
            updated_by=current_user,
        )
    except (PermissionError, LookupError, ValueError) as exc:
        raise _translate_error(exc) from exc
    return LeadRead.model_validate(lead)


@router.post("/{lead_id}/status", response_model=LeadRead)
def update_lead_status(
    lead_id: str,
    payload: LeadStatusUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    feed: ChangeFeed = Depends(get_change_feed),
) -> LeadRead:
    """Record a status change together with remarks or a callback time."""

    try:
        lead = update_lead_status_uc(
            db,
            feed,
            lead_id=lead_id,
            user=current_user,
            status=payload.status,
            remarks=payload.remarks,
            reason=payload.note,
            callback_at=payload.callback_at,
        )
    except (PermissionError, LookupError, ValueError) as exc:
        raise _translate_error(exc) from exc
    return LeadRead.model_validate(lead)
