"""Trigger assignment notifications from lead change events."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Mapping
from datetime import datetime
from typing import Any

from leaddesk.domain.entities import (
    EVENT_UPDATE,
    AssignmentNotification,
    DispatchResult,
    LeadChangeEvent,
)
from leaddesk.infrastructure.notifications import ChangeFeed, Subscription

from .lead_assignment import LeadAssignmentNotifier

logger = logging.getLogger(__name__)

LEADS_TABLE = "leads"


def is_first_assignment(change: LeadChangeEvent, user_id: str) -> bool:
    """Return ``True`` when the lead moved from unassigned to ``user_id``.

    Reassignments from another user and unrelated updates do not count.
    """

    previous = change.old.get("assigned_to")
    return not previous and change.new.get("assigned_to") == user_id


def notification_from_row(row: Mapping[str, Any]) -> AssignmentNotification:
    """Build the notification payload from a ``leads`` row snapshot."""

    assigned_at = row.get("assigned_at")
    if isinstance(assigned_at, str):
        assigned_at = datetime.fromisoformat(assigned_at)
    return AssignmentNotification(
        lead_id=row["id"],
        lead_name=row.get("name") or "",
        lead_phone=row.get("phone") or "",
        lead_email=row.get("email"),
        assigned_to=row["assigned_to"],
        assigned_by=row.get("assigned_by"),
        assigned_at=assigned_at,
        priority=row.get("priority"),
        loan_amount=row.get("loan_amount"),
        loan_type=row.get("loan_type"),
    )


class LeadAssignmentWatcher:
    """Watch lead updates for one user and notify them of new assignments.

    Dispatches run on the event loop that was running when :meth:`start` was
    called, whichever thread publishes the change.
    """

    def __init__(
        self,
        feed: ChangeFeed,
        notifier: LeadAssignmentNotifier,
        user_id: str,
    ) -> None:
        self._feed = feed
        self._notifier = notifier
        self.user_id = user_id
        self._subscription: Subscription | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._tasks: set[asyncio.Task[DispatchResult]] = set()

    @property
    def active(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> "LeadAssignmentWatcher":
        if self.active:
            return self
        self._loop = asyncio.get_running_loop()
        self._subscription = self._feed.subscribe(
            table=LEADS_TABLE,
            event=EVENT_UPDATE,
            filters={"assigned_to": self.user_id},
            callback=self._on_change,
        )
        logger.debug("Watching lead assignments for user %s", self.user_id)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    def _on_change(self, change: LeadChangeEvent) -> None:
        if not is_first_assignment(change, self.user_id):
            return
        notification = notification_from_row(change.new)
        self._schedule(self._notifier.notify_lead_assignment(notification))

    def _schedule(self, coro: Coroutine[Any, Any, DispatchResult]) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.warning("Event loop unavailable; dropping assignment notification")
            coro.close()
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            task = loop.create_task(coro)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        else:
            asyncio.run_coroutine_threadsafe(coro, loop)


def watch_lead_assignments(
    feed: ChangeFeed, notifier: LeadAssignmentNotifier, user_id: str
) -> LeadAssignmentWatcher:
    """Start and return a watcher; close it when the consumer goes away."""

    return LeadAssignmentWatcher(feed, notifier, user_id).start()


class LeadAssignmentWatchers:
    """Share one watcher per user across all of that user's connections.

    ``acquire`` starts the watcher on the first connection and ``release``
    closes it when the last one goes away, so each assignment is dispatched
    once however many clients the user has open.
    """

    def __init__(self, feed: ChangeFeed, notifier: LeadAssignmentNotifier) -> None:
        self._feed = feed
        self._notifier = notifier
        self._watchers: dict[str, LeadAssignmentWatcher] = {}
        self._references: dict[str, int] = {}

    def acquire(self, user_id: str) -> LeadAssignmentWatcher:
        watcher = self._watchers.get(user_id)
        if watcher is None or not watcher.active:
            watcher = watch_lead_assignments(self._feed, self._notifier, user_id)
            self._watchers[user_id] = watcher
            self._references[user_id] = 0
        self._references[user_id] += 1
        return watcher

    def release(self, user_id: str) -> None:
        remaining = self._references.get(user_id, 0) - 1
        if remaining > 0:
            self._references[user_id] = remaining
            return
        self._references.pop(user_id, None)
        watcher = self._watchers.pop(user_id, None)
        if watcher is not None:
            watcher.close()

    def reference_count(self, user_id: str) -> int:
        return self._references.get(user_id, 0)

    def close_all(self) -> None:
        for watcher in self._watchers.values():
            watcher.close()
        self._watchers.clear()
        self._references.clear()


__all__ = [
    "LEADS_TABLE",
    "LeadAssignmentWatcher",
    "LeadAssignmentWatchers",
    "is_first_assignment",
    "notification_from_row",
    "watch_lead_assignments",
]
