"""Dispatch of lead assignment notifications.

The flow for one assignment is: look up the assignee, stop if they opted out,
render the text, deliver on every channel (alert, toast, push) and finally
record a history row. Nothing in here raises to the caller; every failure is
logged and reflected in the returned :class:`DispatchResult`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy.orm import Session

from leaddesk.domain.entities import (
    NOTIFICATION_TYPE_BULK_LEAD_ASSIGNMENT,
    NOTIFICATION_TYPE_LEAD_ASSIGNMENT,
    ROLE_TELECALLER,
    AssignmentNotification,
    DispatchResult,
    NotificationHistory,
    User,
)
from leaddesk.infrastructure.notifications import ChannelMessage, NotificationChannel
from leaddesk.infrastructure.repositories import (
    NotificationHistoryRepository,
    UserRepository,
)
from leaddesk.utils import now_in_app_timezone

from .formatting import (
    ASSIGNMENT_HISTORY_TITLE,
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_NUMBER_LOCALE,
    assignment_summary,
    format_assignment_message,
    format_bulk_message,
)

logger = logging.getLogger(__name__)

SKIP_RECIPIENT_UNAVAILABLE = "recipient_unavailable"
SKIP_DISABLED = "notifications_disabled"
SKIP_EMPTY = "no_assignments"
SKIP_ERROR = "error"

SessionFactory = Callable[[], Session]


def lead_url(role: str | None, lead_id: str) -> str:
    return f"/{role or ROLE_TELECALLER}/leads/{lead_id}"


def leads_url(role: str | None) -> str:
    return f"/{role or ROLE_TELECALLER}/leads"


def _json_number(value: Any) -> Any:
    if value is None or isinstance(value, (int, float)):
        return value
    number = float(value)
    return int(number) if number.is_integer() else number


class LeadAssignmentNotifier:
    """Deliver assignment notifications on every configured channel."""

    def __init__(
        self,
        session_factory: SessionFactory,
        channels: Sequence[NotificationChannel],
        *,
        number_locale: str = DEFAULT_NUMBER_LOCALE,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    ) -> None:
        self._session_factory = session_factory
        self._channels = list(channels)
        self._number_locale = number_locale
        self._currency_symbol = currency_symbol

    async def notify_lead_assignment(
        self, notification: AssignmentNotification
    ) -> DispatchResult:
        """Notify ``notification.assigned_to`` that a lead was assigned to them."""

        result = DispatchResult(user_id=notification.assigned_to)
        try:
            recipient = self._lookup_recipient(notification.assigned_to)
            if recipient is None:
                result.skipped_reason = SKIP_RECIPIENT_UNAVAILABLE
                return result
            if not recipient.wants_assignment_notifications():
                result.skipped_reason = SKIP_DISABLED
                return result

            title, body = format_assignment_message(
                notification,
                locale=self._number_locale,
                currency_symbol=self._currency_symbol,
            )
            message = ChannelMessage(
                user_id=notification.assigned_to,
                title=title,
                body=body,
                tag=f"lead-assignment-{notification.lead_id}",
                url=lead_url(recipient.role, notification.lead_id),
                action_label="View Lead",
                data={
                    "type": NOTIFICATION_TYPE_LEAD_ASSIGNMENT,
                    "leadId": notification.lead_id,
                    "leadName": notification.lead_name,
                    "leadPhone": notification.lead_phone,
                    "priority": notification.priority,
                },
            )
            result.channels = await self._deliver(message)
            result.delivered = any(result.channels.values())
            result.history_recorded = self._record_history(
                NotificationHistory(
                    id=None,
                    user_id=notification.assigned_to,
                    type=NOTIFICATION_TYPE_LEAD_ASSIGNMENT,
                    title=ASSIGNMENT_HISTORY_TITLE,
                    message=assignment_summary(notification),
                    data={
                        "leadId": notification.lead_id,
                        "leadName": notification.lead_name,
                        "leadPhone": notification.lead_phone,
                        "assignedBy": notification.assigned_by,
                        "priority": notification.priority,
                        "loanAmount": _json_number(notification.loan_amount),
                        "loanType": notification.loan_type,
                    },
                    read=False,
                    created_at=now_in_app_timezone(),
                )
            )
        except Exception:
            logger.exception(
                "Error sending lead assignment notification for lead %s",
                notification.lead_id,
            )
            result.skipped_reason = SKIP_ERROR
        return result

    async def notify_bulk_assignment(
        self,
        assignments: Sequence[AssignmentNotification],
        assigned_to: str,
    ) -> DispatchResult:
        """Send one summary notification for ``assignments``.

        Per-lead details (priority, amount, type) are not rendered here.
        """

        result = DispatchResult(user_id=assigned_to)
        try:
            if not assignments:
                result.skipped_reason = SKIP_EMPTY
                return result

            recipient = self._lookup_recipient(assigned_to)
            if recipient is None:
                result.skipped_reason = SKIP_RECIPIENT_UNAVAILABLE
                return result
            if not recipient.wants_assignment_notifications():
                result.skipped_reason = SKIP_DISABLED
                return result

            count = len(assignments)
            lead_ids = [assignment.lead_id for assignment in assignments]
            title, body = format_bulk_message(count)
            message = ChannelMessage(
                user_id=assigned_to,
                title=title,
                body=body,
                tag=f"bulk-assignment-{int(time.time() * 1000)}",
                url=leads_url(recipient.role),
                action_label="View Leads",
                data={
                    "type": NOTIFICATION_TYPE_BULK_LEAD_ASSIGNMENT,
                    "count": count,
                    "leadIds": lead_ids,
                },
            )
            result.channels = await self._deliver(message)
            result.delivered = any(result.channels.values())
            result.history_recorded = self._record_history(
                NotificationHistory(
                    id=None,
                    user_id=assigned_to,
                    type=NOTIFICATION_TYPE_BULK_LEAD_ASSIGNMENT,
                    title=title.removeprefix("🎯 "),
                    message=body,
                    data={"count": count, "leadIds": lead_ids},
                    read=False,
                    created_at=now_in_app_timezone(),
                )
            )
        except Exception:
            logger.exception("Error sending bulk assignment notification to %s", assigned_to)
            result.skipped_reason = SKIP_ERROR
        return result

    def _lookup_recipient(self, user_id: str) -> User | None:
        try:
            with self._session_factory() as session:
                user = UserRepository(session).get(user_id)
        except Exception:
            logger.exception("Error fetching assigned user %s", user_id)
            return None
        if user is None:
            logger.error("Error fetching assigned user: %s not found", user_id)
        return user

    async def _deliver(self, message: ChannelMessage) -> dict[str, bool]:
        outcomes: dict[str, bool] = {}
        for channel in self._channels:
            try:
                outcomes[channel.name] = bool(await channel.deliver(message))
            except Exception:
                logger.exception(
                    "Channel %s failed for user %s", channel.name, message.user_id
                )
                outcomes[channel.name] = False
        return outcomes

    def _record_history(self, entry: NotificationHistory) -> bool:
        try:
            with self._session_factory() as session:
                NotificationHistoryRepository(session).create(entry)
        except Exception:
            logger.exception("Error storing notification history for user %s", entry.user_id)
            return False
        return True


__all__ = [
    "LeadAssignmentNotifier",
    "SKIP_DISABLED",
    "SKIP_EMPTY",
    "SKIP_ERROR",
    "SKIP_RECIPIENT_UNAVAILABLE",
    "SessionFactory",
    "lead_url",
    "leads_url",
]
