"""Endpoints for the authenticated user's own settings."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from leaddesk.application.use_cases.users import (
    get_notification_preferences,
    update_notification_preferences,
)
from leaddesk.domain.entities import User
from leaddesk.infrastructure.database import get_db
from leaddesk.interfaces.api.dependencies import get_current_active_user
from leaddesk.interfaces.api.schemas import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    UserSummaryRead,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserSummaryRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    return UserSummaryRead.model_validate(current_user)


@router.get("/me/notification-preferences", response_model=NotificationPreferencesRead)
def read_notification_preferences(
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    return NotificationPreferencesRead(**get_notification_preferences(current_user))


@router.put("/me/notification-preferences", response_model=NotificationPreferencesRead)
def change_notification_preferences(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    """Turn lead assignment notifications on or off."""

    try:
        preferences = update_notification_preferences(
            db,
            user=current_user,
            assignment_notifications=payload.assignment_notifications,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NotificationPreferencesRead(**preferences)
