"""Use cases for reading and acknowledging notification history."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from leaddesk.domain.entities import NotificationHistory
from leaddesk.infrastructure.repositories import NotificationHistoryRepository


def list_notifications(
    session: Session, *, user_id: str, unread_only: bool = False, limit: int = 50
) -> Sequence[NotificationHistory]:
    repository = NotificationHistoryRepository(session)
    if unread_only:
        return repository.list_unread_for_user(user_id, limit=limit)
    return repository.list_for_user(user_id, limit=limit)


def mark_notifications_read(
    session: Session, *, user_id: str, notification_ids: Iterable[str]
) -> int:
    """Flag the given entries as read; ids owned by other users are ignored."""

    return NotificationHistoryRepository(session).mark_as_read(
        notification_ids, user_id=user_id
    )


__all__ = ["list_notifications", "mark_notifications_read"]
