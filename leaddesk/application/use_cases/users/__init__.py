"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user
from .notification_preferences import (
    get_notification_preferences,
    update_notification_preferences,
)

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "get_notification_preferences",
    "update_notification_preferences",
]
