"""Request and response schemas for the HTTP API."""

from .auth import Token
from .lead import (
    BulkAssignRequest,
    BulkAssignResponse,
    CallLogRead,
    LeadDetailRead,
    LeadNoteRead,
    LeadRead,
    LeadStatusUpdateRequest,
    LeadUpdateRequest,
)
from .notification import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)
from .user import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    UserSummaryRead,
)

__all__ = [
    "BulkAssignRequest",
    "BulkAssignResponse",
    "CallLogRead",
    "LeadDetailRead",
    "LeadNoteRead",
    "LeadRead",
    "LeadStatusUpdateRequest",
    "LeadUpdateRequest",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "Token",
    "UserSummaryRead",
]
