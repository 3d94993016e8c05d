"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from leaddesk.domain.entities import User
from leaddesk.infrastructure.models import UserModel


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def list_active_by_role(self, role: str) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.role == role)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.full_name.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            full_name=user.full_name,
            email=user.email,
            password=user.password,
            role=user.role,
            is_active=user.is_active,
            notification_preferences=user.notification_preferences or None,
        )
        if user.id:
            model.id = user.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_notification_preferences(
        self, user_id: str, preferences: dict[str, Any]
    ) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        merged = dict(model.notification_preferences or {})
        merged.update(preferences)
        # Reassign so the JSON column is flagged as modified.
        model.notification_preferences = merged
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            password=model.password,
            role=model.role,
            is_active=bool(model.is_active),
            notification_preferences=dict(model.notification_preferences or {}),
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
