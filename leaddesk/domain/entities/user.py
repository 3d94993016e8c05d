"""Domain entity representing a dashboard user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ROLE_ADMIN = "admin"
ROLE_TELECALLER = "telecaller"


@dataclass
class User:
    """Core attributes describing an admin or telecaller account."""

    id: str | None
    full_name: str
    email: str
    password: str
    role: str = ROLE_TELECALLER
    is_active: bool = True
    notification_preferences: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return (self.role or "").lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def wants_assignment_notifications(self) -> bool:
        """Only an explicit ``False`` opts the user out of assignment alerts."""

        preferences = self.notification_preferences or {}
        return preferences.get("assignment_notifications") is not False


__all__ = ["ROLE_ADMIN", "ROLE_TELECALLER", "User"]
