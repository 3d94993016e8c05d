"""Text rendering for lead assignment notifications."""

from __future__ import annotations

from babel.numbers import format_decimal

from leaddesk.domain.entities import AssignmentNotification

ASSIGNMENT_TITLE = "🎯 New Lead Assigned"
ASSIGNMENT_HISTORY_TITLE = "New Lead Assigned"
DEFAULT_NUMBER_LOCALE = "en_IN"
DEFAULT_CURRENCY_SYMBOL = "₹"


def format_amount(amount, *, locale: str = DEFAULT_NUMBER_LOCALE) -> str:
    """Group ``amount`` with the thousands separators of ``locale``."""

    return format_decimal(amount, locale=locale)


def format_lead_details(
    notification: AssignmentNotification,
    *,
    locale: str = DEFAULT_NUMBER_LOCALE,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """Return the ``" (Priority: ..., Amount: ..., Type: ...)"`` suffix.

    Medium priority is the default and is left out. An empty string is
    returned when no detail applies.
    """

    details: list[str] = []

    if notification.priority and notification.priority != "medium":
        details.append(f"Priority: {notification.priority.upper()}")

    if notification.loan_amount:
        details.append(
            f"Amount: {currency_symbol}{format_amount(notification.loan_amount, locale=locale)}"
        )

    if notification.loan_type:
        details.append(f"Type: {notification.loan_type}")

    return f" ({', '.join(details)})" if details else ""


def assignment_summary(notification: AssignmentNotification) -> str:
    return f"{notification.lead_name} has been assigned to you"


def format_assignment_body(
    notification: AssignmentNotification,
    *,
    locale: str = DEFAULT_NUMBER_LOCALE,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    details = format_lead_details(
        notification, locale=locale, currency_symbol=currency_symbol
    )
    return f"{assignment_summary(notification)}{details}"


def format_assignment_message(
    notification: AssignmentNotification,
    *,
    locale: str = DEFAULT_NUMBER_LOCALE,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> tuple[str, str]:
    """Return the ``(title, body)`` pair shown on every channel."""

    body = format_assignment_body(
        notification, locale=locale, currency_symbol=currency_symbol
    )
    return ASSIGNMENT_TITLE, body


def format_bulk_message(count: int) -> tuple[str, str]:
    return f"🎯 {count} New Leads Assigned", f"{count} leads have been assigned to you"


__all__ = [
    "ASSIGNMENT_HISTORY_TITLE",
    "ASSIGNMENT_TITLE",
    "assignment_summary",
    "format_amount",
    "format_assignment_body",
    "format_assignment_message",
    "format_bulk_message",
    "format_lead_details",
]
