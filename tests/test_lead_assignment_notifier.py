"""Tests for the lead assignment dispatch flow."""

from __future__ import annotations

from datetime import datetime

import pytest

from leaddesk.application.use_cases.notifications import LeadAssignmentNotifier
from leaddesk.application.use_cases.notifications.lead_assignment import (
    SKIP_DISABLED,
    SKIP_EMPTY,
    SKIP_RECIPIENT_UNAVAILABLE,
)
from leaddesk.domain.entities import AssignmentNotification
from leaddesk.infrastructure.repositories import NotificationHistoryRepository

pytestmark = pytest.mark.anyio


class RecordingChannel:
    def __init__(self, name: str, *, fail: bool = False) -> None:
        self.name = name
        self.fail = fail
        self.messages = []

    async def deliver(self, message) -> bool:
        self.messages.append(message)
        if self.fail:
            raise RuntimeError(f"{self.name} is down")
        return True


@pytest.fixture
def channels():
    return {
        "alert": RecordingChannel("alert"),
        "toast": RecordingChannel("toast"),
        "push": RecordingChannel("push"),
    }


@pytest.fixture
def notifier(session_factory, channels):
    return LeadAssignmentNotifier(session_factory, list(channels.values()))


def _notification(user_id: str, **overrides) -> AssignmentNotification:
    values = {
        "lead_id": "lead-1",
        "lead_name": "Asha Rao",
        "lead_phone": "+919876543210",
        "assigned_to": user_id,
        "assigned_by": "admin-1",
        "assigned_at": datetime(2026, 10, 1, 10, 30),
        "priority": "high",
        "loan_amount": 200000,
        "loan_type": "Personal",
    }
    values.update(overrides)
    return AssignmentNotification(**values)


def _history(session_factory, user_id):
    with session_factory() as session:
        return NotificationHistoryRepository(session).list_for_user(user_id)


async def test_delivers_on_every_channel_and_records_history(
    notifier, channels, make_user, session_factory
):
    user = make_user()

    result = await notifier.notify_lead_assignment(_notification(user.id))

    assert result.delivered is True
    assert result.channels == {"alert": True, "toast": True, "push": True}
    assert result.history_recorded is True

    alert = channels["alert"].messages[0]
    assert alert.title == "🎯 New Lead Assigned"
    assert alert.body == (
        "Asha Rao has been assigned to you (Priority: HIGH, Amount: ₹2,00,000, Type: Personal)"
    )
    assert alert.tag == "lead-assignment-lead-1"
    assert alert.url == "/telecaller/leads/lead-1"
    assert alert.action_label == "View Lead"
    assert alert.data == {
        "type": "lead_assignment",
        "leadId": "lead-1",
        "leadName": "Asha Rao",
        "leadPhone": "+919876543210",
        "priority": "high",
    }
    assert channels["toast"].messages == [alert]
    assert channels["push"].messages == [alert]

    [entry] = _history(session_factory, user.id)
    assert entry.type == "lead_assignment"
    assert entry.title == "New Lead Assigned"
    assert entry.message == "Asha Rao has been assigned to you"
    assert entry.read is False
    assert entry.data == {
        "leadId": "lead-1",
        "leadName": "Asha Rao",
        "leadPhone": "+919876543210",
        "assignedBy": "admin-1",
        "priority": "high",
        "loanAmount": 200000,
        "loanType": "Personal",
    }


async def test_opted_out_user_gets_nothing(notifier, channels, make_user, session_factory):
    user = make_user(preferences={"assignment_notifications": False})

    result = await notifier.notify_lead_assignment(_notification(user.id))

    assert result.skipped_reason == SKIP_DISABLED
    assert all(not channel.messages for channel in channels.values())
    assert _history(session_factory, user.id) == []


async def test_missing_preference_flag_means_enabled(notifier, channels, make_user):
    user = make_user(preferences={"email_digest": False})

    result = await notifier.notify_lead_assignment(_notification(user.id))

    assert result.delivered is True
    assert len(channels["alert"].messages) == 1


async def test_unknown_user_aborts_and_logs(notifier, channels, caplog):
    with caplog.at_level("ERROR"):
        result = await notifier.notify_lead_assignment(_notification("missing-user"))

    assert result.skipped_reason == SKIP_RECIPIENT_UNAVAILABLE
    assert all(not channel.messages for channel in channels.values())
    assert "Error fetching assigned user" in caplog.text


async def test_failed_channel_does_not_stop_the_others(
    session_factory, make_user, caplog
):
    alert = RecordingChannel("alert", fail=True)
    toast = RecordingChannel("toast")
    push = RecordingChannel("push")
    notifier = LeadAssignmentNotifier(session_factory, [alert, toast, push])
    user = make_user()

    with caplog.at_level("ERROR"):
        result = await notifier.notify_lead_assignment(_notification(user.id))

    assert result.channels == {"alert": False, "toast": True, "push": True}
    assert len(toast.messages) == 1
    assert len(push.messages) == 1
    assert result.history_recorded is True
    assert "Channel alert failed" in caplog.text


async def test_history_failure_keeps_delivery(session_factory, channels, make_user, caplog):
    calls = {"count": 0}

    def flaky_factory():
        calls["count"] += 1
        if calls["count"] > 1:
            raise RuntimeError("database unavailable")
        return session_factory()

    notifier = LeadAssignmentNotifier(flaky_factory, list(channels.values()))
    user = make_user()

    with caplog.at_level("ERROR"):
        result = await notifier.notify_lead_assignment(_notification(user.id))

    assert result.delivered is True
    assert result.history_recorded is False
    assert len(channels["push"].messages) == 1
    assert "Error storing notification history" in caplog.text


async def test_admin_recipient_gets_admin_link(notifier, channels, make_user):
    admin = make_user(full_name="Ravi Kumar", role="admin")

    await notifier.notify_lead_assignment(_notification(admin.id, lead_id="lead-9"))

    assert channels["toast"].messages[0].url == "/admin/leads/lead-9"


async def test_bulk_assignment_sends_one_summary(
    notifier, channels, make_user, session_factory
):
    user = make_user()
    assignments = [
        _notification(user.id, lead_id=f"lead-{index}", lead_name=f"Lead {index}")
        for index in range(1, 4)
    ]

    result = await notifier.notify_bulk_assignment(assignments, user.id)

    assert result.delivered is True
    for channel in channels.values():
        assert len(channel.messages) == 1

    message = channels["push"].messages[0]
    assert message.title == "🎯 3 New Leads Assigned"
    assert message.body == "3 leads have been assigned to you"
    assert message.url == "/telecaller/leads"
    assert message.tag.startswith("bulk-assignment-")
    assert message.data == {
        "type": "bulk_lead_assignment",
        "count": 3,
        "leadIds": ["lead-1", "lead-2", "lead-3"],
    }

    [entry] = _history(session_factory, user.id)
    assert entry.type == "bulk_lead_assignment"
    assert entry.data == {"count": 3, "leadIds": ["lead-1", "lead-2", "lead-3"]}


async def test_bulk_assignment_respects_opt_out(notifier, channels, make_user):
    user = make_user(preferences={"assignment_notifications": False})

    result = await notifier.notify_bulk_assignment([_notification(user.id)], user.id)

    assert result.skipped_reason == SKIP_DISABLED
    assert all(not channel.messages for channel in channels.values())


async def test_bulk_assignment_without_leads_is_skipped(notifier, channels, make_user):
    user = make_user()

    result = await notifier.notify_bulk_assignment([], user.id)

    assert result.skipped_reason == SKIP_EMPTY
    assert all(not channel.messages for channel in channels.values())
