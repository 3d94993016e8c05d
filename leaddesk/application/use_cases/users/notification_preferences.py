"""Use cases for reading and changing notification preferences."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from leaddesk.domain.entities import User
from leaddesk.infrastructure.repositories import UserRepository


def get_notification_preferences(user: User) -> dict[str, Any]:
    """Return the stored preferences with defaults applied."""

    preferences = dict(user.notification_preferences or {})
    preferences["assignment_notifications"] = user.wants_assignment_notifications()
    return preferences


def update_notification_preferences(
    session: Session, *, user: User, assignment_notifications: bool
) -> dict[str, Any]:
    updated = UserRepository(session).update_notification_preferences(
        user.id, {"assignment_notifications": assignment_notifications}
    )
    return get_notification_preferences(updated)
