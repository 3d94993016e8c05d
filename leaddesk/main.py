"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leaddesk.application.use_cases.notifications import (
    LeadAssignmentNotifier,
    LeadAssignmentWatchers,
)
from leaddesk.config import get_settings
from leaddesk.infrastructure.database import SessionLocal, engine, initialize_database
from leaddesk.infrastructure.notifications import (
    AlertChannel,
    ChangeFeed,
    NotificationConnectionManager,
    PushChannel,
    ToastChannel,
)
from leaddesk.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database schema and the notification services."""

    settings = get_settings()
    initialize_database()

    manager = NotificationConnectionManager()
    feed = ChangeFeed()
    push_client = httpx.AsyncClient(timeout=settings.push_timeout_seconds)
    app.state.connection_manager = manager
    app.state.change_feed = feed
    notifier = LeadAssignmentNotifier(
        SessionLocal,
        [
            AlertChannel(manager),
            ToastChannel(manager, duration_ms=settings.toast_duration_ms),
            PushChannel(
                push_client,
                settings.push_endpoint_url,
                api_key=settings.push_api_key,
            ),
        ],
        number_locale=settings.number_locale,
        currency_symbol=settings.currency_symbol,
    )
    app.state.lead_assignment_notifier = notifier
    app.state.lead_assignment_watchers = LeadAssignmentWatchers(feed, notifier)
    if not settings.push_endpoint_url:
        logger.warning("PUSH_ENDPOINT_URL is not set; push notifications are disabled")
    try:
        yield
    finally:
        app.state.lead_assignment_watchers.close_all()
        feed.close_all()
        await push_client.aclose()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="leaddesk", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    return app
