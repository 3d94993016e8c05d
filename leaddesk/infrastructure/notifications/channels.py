"""Delivery channels used by the lead assignment notifier.

Every channel swallows and logs its own failures and reports the outcome as a
boolean, so one broken channel never stops the others. The websocket
channels report ``False`` when no open connection of the user received the
message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from .manager import NotificationConnectionManager

logger = logging.getLogger(__name__)

CHANNEL_ALERT = "alert"
CHANNEL_TOAST = "toast"
CHANNEL_PUSH = "push"


@dataclass(frozen=True)
class ChannelMessage:
    """Everything a channel needs to render one notification."""

    user_id: str
    title: str
    body: str
    tag: str
    url: str
    action_label: str
    data: dict[str, Any] = field(default_factory=dict)


class NotificationChannel(Protocol):
    name: str

    async def deliver(self, message: ChannelMessage) -> bool:
        ...


class AlertChannel:
    """Ask the user's clients to raise a device notification."""

    name = CHANNEL_ALERT

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    async def deliver(self, message: ChannelMessage) -> bool:
        payload = {
            "type": "alert",
            "data": {
                "title": message.title,
                "body": message.body,
                "tag": message.tag,
                "require_interaction": True,
            },
        }
        try:
            reached = await self._manager.send_to_user(message.user_id, payload)
        except Exception:
            logger.exception("Error showing alert notification for user %s", message.user_id)
            return False
        return reached > 0


class ToastChannel:
    """Ask the user's clients to show a success toast with a link."""

    name = CHANNEL_TOAST

    def __init__(self, manager: NotificationConnectionManager, *, duration_ms: int = 8000) -> None:
        self._manager = manager
        self._duration_ms = duration_ms

    async def deliver(self, message: ChannelMessage) -> bool:
        payload = {
            "type": "toast",
            "data": {
                "variant": "success",
                "title": message.title,
                "description": message.body,
                "duration_ms": self._duration_ms,
                "action": {
                    "label": message.action_label,
                    "url": message.url,
                    "target": "_blank",
                },
            },
        }
        try:
            reached = await self._manager.send_to_user(message.user_id, payload)
        except Exception:
            logger.exception("Error showing toast notification for user %s", message.user_id)
            return False
        return reached > 0


class PushChannel:
    """Relay the notification to the push-delivery endpoint."""

    name = CHANNEL_PUSH

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint_url: str | None,
        *,
        api_key: str | None = None,
    ) -> None:
        self._client = client
        self._endpoint_url = endpoint_url
        self._api_key = api_key

    async def deliver(self, message: ChannelMessage) -> bool:
        if not self._endpoint_url:
            logger.info("Push endpoint not configured; skipping push delivery")
            return False

        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        body = {
            "userId": message.user_id,
            "title": message.title,
            "body": message.body,
            "url": message.url,
            "data": message.data,
        }
        try:
            response = await self._client.post(self._endpoint_url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Error sending push notification: %s", exc)
            return False

        if not response.is_success:
            logger.error(
                "Failed to send push notification (status %s): %s",
                response.status_code,
                response.text,
            )
            return False
        return True


__all__ = [
    "AlertChannel",
    "CHANNEL_ALERT",
    "CHANNEL_PUSH",
    "CHANNEL_TOAST",
    "ChannelMessage",
    "NotificationChannel",
    "PushChannel",
    "ToastChannel",
]
