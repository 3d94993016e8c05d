"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from leaddesk.application.use_cases.notifications import (
    list_notifications as list_notifications_uc,
    mark_notifications_read as mark_notifications_read_uc,
)
from leaddesk.domain.entities import NotificationHistory, User
from leaddesk.infrastructure.database import SessionLocal, get_db
from leaddesk.interfaces.api.dependencies import get_current_active_user, resolve_current_user
from leaddesk.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_payload(entry: NotificationHistory) -> dict[str, Any]:
    return NotificationRead.model_validate(entry).model_dump(mode="json")


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notification history for the authenticated user."""

    entries = list_notifications_uc(
        db, user_id=current_user.id, unread_only=unread, limit=limit
    )
    return [NotificationRead.model_validate(entry) for entry in entries]


@router.post("/read", response_model=NotificationMarkReadResponse)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMarkReadResponse:
    updated = mark_notifications_read_uc(
        db, user_id=current_user.id, notification_ids=payload.unique_ids()
    )
    return NotificationMarkReadResponse(updated=updated)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream notifications to the user and watch their lead assignments."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=400, detail="Inactive user")
        pending = list_notifications_uc(session, user_id=user.id, unread_only=True)
    except HTTPException:
        await websocket.close(code=1008)
        return
    except Exception:
        logger.exception("Could not open notification socket")
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    state = websocket.app.state
    manager = state.connection_manager
    await manager.connect(user.id, websocket)
    watchers = state.lead_assignment_watchers
    watchers.acquire(user.id)
    try:
        if pending:
            await websocket.send_json(
                {"type": "init", "data": [_notification_to_payload(n) for n in pending]}
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    with SessionLocal() as ack_session:
                        mark_notifications_read_uc(
                            ack_session,
                            user_id=user.id,
                            notification_ids=[str(i) for i in ids],
                        )
    except WebSocketDisconnect:
        pass
    finally:
        watchers.release(user.id)
        manager.disconnect(user.id, websocket)
