"""In-process change feed for row-level events on application tables."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from leaddesk.domain.entities import LeadChangeEvent

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[LeadChangeEvent], None]


class Subscription:
    """Handle returned by :meth:`ChangeFeed.subscribe`; call ``close`` to stop."""

    def __init__(
        self,
        feed: "ChangeFeed",
        *,
        table: str,
        event: str,
        filters: Mapping[str, Any],
        callback: ChangeCallback,
    ) -> None:
        self._feed = feed
        self.table = table
        self.event = event.upper()
        self.filters = dict(filters)
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def matches(self, change: LeadChangeEvent) -> bool:
        if not self._active:
            return False
        if change.table != self.table or change.event.upper() != self.event:
            return False
        return all(change.new.get(column) == value for column, value in self.filters.items())

    def notify(self, change: LeadChangeEvent) -> None:
        self._callback(change)

    def close(self) -> None:
        if not self._active:
            return
        self._active = False
        self._feed._remove(self)


class ChangeFeed:
    """Fan out :class:`LeadChangeEvent` objects to matching subscriptions.

    Filters are equality checks evaluated against the ``new`` snapshot of the
    row, mirroring a ``column=eq.value`` filter of a database change stream.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(
        self,
        *,
        table: str,
        event: str,
        callback: ChangeCallback,
        filters: Mapping[str, Any] | None = None,
    ) -> Subscription:
        subscription = Subscription(
            self, table=table, event=event, filters=filters or {}, callback=callback
        )
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def publish(self, change: LeadChangeEvent) -> int:
        """Deliver ``change`` to every matching subscription.

        Callback errors are logged and never reach the publisher. Returns the
        number of subscriptions notified.
        """

        with self._lock:
            targets = [sub for sub in self._subscriptions if sub.matches(change)]

        for subscription in targets:
            try:
                subscription.notify(change)
            except Exception:
                logger.exception(
                    "Change feed subscriber failed for %s %s", change.table, change.event
                )
        return len(targets)

    def subscription_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def close_all(self) -> None:
        with self._lock:
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription.close()

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass


__all__ = ["ChangeCallback", "ChangeFeed", "Subscription"]
