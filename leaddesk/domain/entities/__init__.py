"""Domain entities exposed by the application."""

from .lead import (
    LEAD_PRIORITIES,
    LEAD_STATUS_FOLLOW_UP,
    LEAD_STATUS_NOT_ELIGIBLE,
    LEAD_STATUSES,
    CallLog,
    Lead,
    LeadDetail,
    LeadNote,
)
from .lead_event import EVENT_DELETE, EVENT_INSERT, EVENT_UPDATE, LeadChangeEvent
from .notification import (
    NOTIFICATION_TYPE_BULK_LEAD_ASSIGNMENT,
    NOTIFICATION_TYPE_LEAD_ASSIGNMENT,
    AssignmentNotification,
    DispatchResult,
    NotificationHistory,
)
from .user import ROLE_ADMIN, ROLE_TELECALLER, User

__all__ = [
    "AssignmentNotification",
    "CallLog",
    "DispatchResult",
    "EVENT_DELETE",
    "EVENT_INSERT",
    "EVENT_UPDATE",
    "LEAD_PRIORITIES",
    "LEAD_STATUSES",
    "LEAD_STATUS_FOLLOW_UP",
    "LEAD_STATUS_NOT_ELIGIBLE",
    "Lead",
    "LeadChangeEvent",
    "LeadDetail",
    "LeadNote",
    "NOTIFICATION_TYPE_BULK_LEAD_ASSIGNMENT",
    "NOTIFICATION_TYPE_LEAD_ASSIGNMENT",
    "NotificationHistory",
    "ROLE_ADMIN",
    "ROLE_TELECALLER",
    "User",
]
