"""Tests for the assignment notification text."""

from datetime import datetime

import pytest

from leaddesk.application.use_cases.notifications import (
    ASSIGNMENT_TITLE,
    format_assignment_body,
    format_assignment_message,
    format_bulk_message,
    format_lead_details,
)
from leaddesk.domain.entities import AssignmentNotification


def _notification(**overrides) -> AssignmentNotification:
    values = {
        "lead_id": "lead-1",
        "lead_name": "Asha Rao",
        "lead_phone": "+919876543210",
        "assigned_to": "u1",
        "assigned_by": "admin-1",
        "assigned_at": datetime(2026, 10, 1, 10, 30),
    }
    values.update(overrides)
    return AssignmentNotification(**values)


def test_body_with_every_detail():
    notification = _notification(priority="high", loan_amount=200000, loan_type="Personal")

    assert format_assignment_body(notification) == (
        "Asha Rao has been assigned to you (Priority: HIGH, Amount: ₹2,00,000, Type: Personal)"
    )


@pytest.mark.parametrize("priority", [None, "", "medium"])
def test_default_priority_is_left_out(priority):
    details = format_lead_details(_notification(priority=priority, loan_type="Home"))

    assert "Priority" not in details
    assert details == " (Type: Home)"


def test_amount_uses_indian_grouping():
    details = format_lead_details(_notification(loan_amount=500000))

    assert details == " (Amount: ₹5,00,000)"


def test_amount_grouping_follows_configured_locale():
    details = format_lead_details(
        _notification(loan_amount=1250000), locale="en_US", currency_symbol="$"
    )

    assert details == " (Amount: $1,250,000)"


@pytest.mark.parametrize("amount", [None, 0])
def test_falsy_amount_is_left_out(amount):
    assert format_lead_details(_notification(loan_amount=amount)) == ""


def test_no_details_gives_plain_body():
    title, body = format_assignment_message(_notification())

    assert title == ASSIGNMENT_TITLE == "🎯 New Lead Assigned"
    assert body == "Asha Rao has been assigned to you"


def test_formatting_is_deterministic():
    notification = _notification(priority="urgent", loan_amount=75000.5, loan_type="Gold")

    first = format_assignment_message(notification)
    second = format_assignment_message(notification)

    assert first == second
    assert first[1].endswith("(Priority: URGENT, Amount: ₹75,000.5, Type: Gold)")


def test_bulk_message():
    assert format_bulk_message(3) == (
        "🎯 3 New Leads Assigned",
        "3 leads have been assigned to you",
    )
