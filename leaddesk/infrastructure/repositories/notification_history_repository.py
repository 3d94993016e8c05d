"""Persistence helpers for notification history entries."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy.orm import Session

from leaddesk.domain.entities import NotificationHistory
from leaddesk.infrastructure.models import NotificationHistoryModel
from leaddesk.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationHistoryRepository:
    """Provide read and write operations for :class:`NotificationHistory`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self, user_id: str, *, limit: int | None = 50
    ) -> Sequence[NotificationHistory]:
        query = (
            self.session.query(NotificationHistoryModel)
            .filter(NotificationHistoryModel.user_id == user_id)
            .order_by(NotificationHistoryModel.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: str, *, limit: int | None = 50
    ) -> Sequence[NotificationHistory]:
        query = (
            self.session.query(NotificationHistoryModel)
            .filter(NotificationHistoryModel.user_id == user_id)
            .filter(NotificationHistoryModel.read.is_(False))
            .order_by(NotificationHistoryModel.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, entry: NotificationHistory) -> NotificationHistory:
        model = NotificationHistoryModel(
            user_id=entry.user_id,
            type=entry.type,
            title=entry.title,
            message=entry.message,
            data=entry.data or {},
            read=entry.read,
            created_at=ensure_app_naive_datetime(entry.created_at or now_in_app_timezone()),
        )
        if entry.id:
            model.id = entry.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, entry_ids: Iterable[str], *, user_id: str) -> int:
        ids = [entry_id for entry_id in entry_ids if entry_id]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationHistoryModel)
            .filter(
                NotificationHistoryModel.id.in_(ids),
                NotificationHistoryModel.user_id == user_id,
            )
            .update({NotificationHistoryModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: NotificationHistoryModel) -> NotificationHistory:
        return NotificationHistory(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            data=dict(model.data or {}),
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationHistoryRepository"]
