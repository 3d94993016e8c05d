"""Use cases for managing leads."""

from .bulk_assign_leads import assignment_notifications, bulk_assign_leads
from .get_lead_detail import get_lead_detail
from .update_lead import update_lead
from .update_lead_status import compose_status_notes, update_lead_status

__all__ = [
    "assignment_notifications",
    "bulk_assign_leads",
    "compose_status_notes",
    "get_lead_detail",
    "update_lead",
    "update_lead_status",
]
