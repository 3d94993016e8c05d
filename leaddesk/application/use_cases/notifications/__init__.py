"""Public helpers for lead assignment notifications."""

from .formatting import (
    ASSIGNMENT_TITLE,
    format_assignment_body,
    format_assignment_message,
    format_bulk_message,
    format_lead_details,
)
from .history import list_notifications, mark_notifications_read
from .lead_assignment import LeadAssignmentNotifier, lead_url, leads_url
from .watcher import (
    LeadAssignmentWatcher,
    LeadAssignmentWatchers,
    is_first_assignment,
    notification_from_row,
    watch_lead_assignments,
)

__all__ = [
    "ASSIGNMENT_TITLE",
    "LeadAssignmentNotifier",
    "LeadAssignmentWatcher",
    "LeadAssignmentWatchers",
    "format_assignment_body",
    "format_assignment_message",
    "format_bulk_message",
    "format_lead_details",
    "is_first_assignment",
    "lead_url",
    "leads_url",
    "list_notifications",
    "mark_notifications_read",
    "notification_from_row",
    "watch_lead_assignments",
]
