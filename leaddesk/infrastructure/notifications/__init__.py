"""Realtime notification helpers for the infrastructure layer."""

from .channels import (
    CHANNEL_ALERT,
    CHANNEL_PUSH,
    CHANNEL_TOAST,
    AlertChannel,
    ChannelMessage,
    NotificationChannel,
    PushChannel,
    ToastChannel,
)
from .manager import NotificationConnectionManager
from .realtime import ChangeCallback, ChangeFeed, Subscription

__all__ = [
    "AlertChannel",
    "CHANNEL_ALERT",
    "CHANNEL_PUSH",
    "CHANNEL_TOAST",
    "ChangeCallback",
    "ChangeFeed",
    "ChannelMessage",
    "NotificationChannel",
    "NotificationConnectionManager",
    "PushChannel",
    "Subscription",
    "ToastChannel",
]
