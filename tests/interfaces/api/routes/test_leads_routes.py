"""Tests for the lead endpoints and the notification websocket."""

from __future__ import annotations

from datetime import datetime

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from leaddesk.domain.entities import DispatchResult, LeadNote, NotificationHistory
from leaddesk.infrastructure.repositories import (
    LeadRepository,
    NotificationHistoryRepository,
)
from leaddesk.infrastructure.security import create_access_token
from leaddesk.main import create_app


class FakeBulkNotifier:
    def __init__(self) -> None:
        self.calls = []

    async def notify_bulk_assignment(self, assignments, assigned_to):
        self.calls.append((list(assignments), assigned_to))
        return DispatchResult(user_id=assigned_to, delivered=True)


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def admin(make_user):
    return make_user(full_name="Ravi Menon", role="admin")


@pytest.fixture
def telecaller(make_user):
    return make_user(full_name="Priya Nair")


def _token(user) -> str:
    return create_access_token({"sub": user.id, "role": user.role})


def _auth_headers(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {_token(user)}"}


def test_admin_assignment_publishes_change(client, admin, telecaller, make_lead):
    lead = make_lead()
    events = []
    client.app.state.change_feed.subscribe(
        table="leads", event="UPDATE", callback=events.append
    )

    response = client.put(
        f"/leads/{lead.id}",
        json={"assigned_to": telecaller.id, "company": "Rao Traders"},
        headers=_auth_headers(admin),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["assigned_to"] == telecaller.id
    assert body["assigned_by"] == admin.id
    assert body["company"] == "Rao Traders"
    assert len(events) == 1
    assert events[0].old["assigned_to"] is None


def test_telecaller_cannot_edit_lead(client, telecaller, make_lead):
    lead = make_lead(assigned_to=telecaller.id)

    response = client.put(
        f"/leads/{lead.id}", json={"name": "Changed"}, headers=_auth_headers(telecaller)
    )

    assert response.status_code == 403


def test_invalid_priority_is_rejected(client, admin, make_lead):
    lead = make_lead()

    response = client.put(
        f"/leads/{lead.id}", json={"priority": "critical"}, headers=_auth_headers(admin)
    )

    assert response.status_code == 400


def test_status_update_for_not_eligible_lead(client, telecaller, make_lead):
    lead = make_lead(assigned_to=telecaller.id)

    response = client.post(
        f"/leads/{lead.id}/status",
        json={"status": "not_eligible", "remarks": "Spoke twice", "note": "Age limit"},
        headers=_auth_headers(telecaller),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "not_eligible"
    assert body["notes"] == "Spoke twice\n\nReason for Not Eligible: Age limit"
    assert body["last_contacted"] is not None


def test_status_update_rejects_unknown_status(client, telecaller, make_lead):
    lead = make_lead(assigned_to=telecaller.id)

    response = client.post(
        f"/leads/{lead.id}/status", json={"status": "closed"}, headers=_auth_headers(telecaller)
    )

    assert response.status_code == 400


def test_lead_detail_access(client, admin, telecaller, make_user, make_lead, session_factory):
    other = make_user(full_name="Kiran Das")
    lead = make_lead(assigned_to=telecaller.id)
    with session_factory() as session:
        LeadRepository(session).add_note(
            LeadNote(
                id=None,
                lead_id=lead.id,
                user_id=admin.id,
                note="Documents pending",
                created_at=datetime(2024, 5, 1, 9, 0),
            )
        )

    response = client.get(f"/leads/{lead.id}", headers=_auth_headers(telecaller))
    assert response.status_code == 200
    body = response.json()
    assert body["lead"]["id"] == lead.id
    assert body["notes"][0]["author_name"] == "Ravi Menon"
    assert body["call_logs"] == []

    assert client.get(f"/leads/{lead.id}", headers=_auth_headers(other)).status_code == 403
    assert client.get("/leads/missing", headers=_auth_headers(admin)).status_code == 404


def test_bulk_assign_sends_one_summary(client, admin, telecaller, make_lead):
    leads = [make_lead(name=f"Lead {index}") for index in range(3)]
    notifier = FakeBulkNotifier()
    client.app.state.lead_assignment_notifier = notifier
    events = []
    client.app.state.change_feed.subscribe(
        table="leads", event="UPDATE", callback=events.append
    )

    response = client.post(
        "/leads/bulk-assign",
        json={"lead_ids": [lead.id for lead in leads], "assigned_to": telecaller.id},
        headers=_auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["count"] == 3
    [(assignments, assigned_to)] = notifier.calls
    assert assigned_to == telecaller.id
    assert [item.lead_id for item in assignments] == [lead.id for lead in leads]
    assert events == []


def test_bulk_assign_unknown_lead(client, admin, telecaller):
    response = client.post(
        "/leads/bulk-assign",
        json={"lead_ids": ["missing"], "assigned_to": telecaller.id},
        headers=_auth_headers(admin),
    )

    assert response.status_code == 404


def test_websocket_requires_token(client):
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/notifications/ws") as websocket:
            websocket.receive_json()

    assert excinfo.value.code == 1008


def test_websocket_answers_ping(client, telecaller):
    with client.websocket_connect(f"/notifications/ws?token={_token(telecaller)}") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_assignment_reaches_open_websocket(client, admin, telecaller, make_lead, session_factory):
    lead = make_lead()

    with client.websocket_connect(f"/notifications/ws?token={_token(telecaller)}") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        response = client.put(
            f"/leads/{lead.id}",
            json={"assigned_to": telecaller.id},
            headers=_auth_headers(admin),
        )
        assert response.status_code == 200

        alert = websocket.receive_json()
        toast = websocket.receive_json()
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    assert alert["type"] == "alert"
    assert alert["data"]["title"] == "🎯 New Lead Assigned"
    assert alert["data"]["body"] == (
        "Asha Rao has been assigned to you "
        "(Priority: HIGH, Amount: ₹2,00,000, Type: Personal)"
    )
    assert alert["data"]["tag"] == f"lead-assignment-{lead.id}"
    assert toast["type"] == "toast"
    assert toast["data"]["action"]["url"] == f"/telecaller/leads/{lead.id}"

    with session_factory() as session:
        [entry] = NotificationHistoryRepository(session).list_for_user(telecaller.id)
    assert entry.title == "New Lead Assigned"
    assert entry.message == "Asha Rao has been assigned to you"


def test_two_clients_of_one_user_get_a_single_dispatch(
    client, admin, telecaller, make_lead, session_factory
):
    lead = make_lead()
    url = f"/notifications/ws?token={_token(telecaller)}"

    with client.websocket_connect(url) as first, client.websocket_connect(url) as second:
        for websocket in (first, second):
            websocket.send_json({"type": "ping"})
            assert websocket.receive_json() == {"type": "pong"}
        assert client.app.state.lead_assignment_watchers.reference_count(telecaller.id) == 2

        response = client.put(
            f"/leads/{lead.id}",
            json={"assigned_to": telecaller.id},
            headers=_auth_headers(admin),
        )
        assert response.status_code == 200

        for websocket in (first, second):
            received = [websocket.receive_json()["type"] for _ in range(2)]
            websocket.send_json({"type": "ping"})
            received.append(websocket.receive_json()["type"])
            assert received == ["alert", "toast", "pong"]

    with session_factory() as session:
        rows = NotificationHistoryRepository(session).list_for_user(telecaller.id)
    assert len(rows) == 1
    assert client.app.state.lead_assignment_watchers.reference_count(telecaller.id) == 0


def test_websocket_sends_unread_history_and_marks_acked(client, telecaller, session_factory):
    with session_factory() as session:
        entry = NotificationHistoryRepository(session).create(
            NotificationHistory(
                id=None,
                user_id=telecaller.id,
                type="lead_assignment",
                title="New Lead Assigned",
                message="Asha Rao has been assigned to you",
                data={"leadId": "lead-1"},
                read=False,
                created_at=None,
            )
        )

    with client.websocket_connect(f"/notifications/ws?token={_token(telecaller)}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert [item["id"] for item in init["data"]] == [entry.id]
        websocket.send_json({"type": "ack", "ids": [entry.id]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    response = client.get("/notifications/?unread=true", headers=_auth_headers(telecaller))
    assert response.json() == []
