"""Publishing of lead change events."""

from __future__ import annotations

import logging

from leaddesk.domain.entities import EVENT_UPDATE, Lead, LeadChangeEvent
from leaddesk.infrastructure.notifications import ChangeFeed
from leaddesk.infrastructure.repositories import LeadRepository

logger = logging.getLogger(__name__)


def publish_lead_update(feed: ChangeFeed | None, *, before: Lead, after: Lead) -> None:
    if feed is None:
        return
    change = LeadChangeEvent(
        table="leads",
        event=EVENT_UPDATE,
        old=LeadRepository.to_row(before),
        new=LeadRepository.to_row(after),
    )
    notified = feed.publish(change)
    logger.debug("Lead %s update delivered to %s subscribers", after.id, notified)
