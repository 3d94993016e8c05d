"""Domain entities for lead assignment notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

NOTIFICATION_TYPE_LEAD_ASSIGNMENT = "lead_assignment"
NOTIFICATION_TYPE_BULK_LEAD_ASSIGNMENT = "bulk_lead_assignment"


@dataclass(frozen=True)
class AssignmentNotification:
    """Transient payload describing a single lead handed to a user."""

    lead_id: str
    lead_name: str
    lead_phone: str
    assigned_to: str
    assigned_by: str | None
    assigned_at: datetime | None
    lead_email: str | None = None
    priority: str | None = None
    loan_amount: Decimal | int | float | None = None
    loan_type: str | None = None


@dataclass
class NotificationHistory:
    """Persisted record of a notification that was attempted."""

    id: str | None
    user_id: str
    type: str
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    read: bool = False
    created_at: datetime | None = None


@dataclass
class DispatchResult:
    """Outcome of a dispatch, for logging and telemetry only."""

    user_id: str
    delivered: bool = False
    skipped_reason: str | None = None
    channels: dict[str, bool] = field(default_factory=dict)
    history_recorded: bool = False


__all__ = [
    "AssignmentNotification",
    "DispatchResult",
    "NOTIFICATION_TYPE_BULK_LEAD_ASSIGNMENT",
    "NOTIFICATION_TYPE_LEAD_ASSIGNMENT",
    "NotificationHistory",
]
