"""Shared fixtures: a throwaway SQLite database and seeded users and leads."""

from __future__ import annotations

import os
import sys
import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "leaddesk_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("PUSH_ENDPOINT_URL", None)
os.environ.pop("PUSH_API_KEY", None)

from leaddesk.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from leaddesk.domain.entities import Lead, User  # noqa: E402
from leaddesk.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from leaddesk.infrastructure.repositories import LeadRepository, UserRepository  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from an empty schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory():
    return SessionLocal


@pytest.fixture
def make_user():
    def _make_user(
        *,
        full_name: str = "Priya Nair",
        email: str | None = None,
        role: str = "telecaller",
        preferences: dict | None = None,
        password: str = "not-a-real-hash",
        is_active: bool = True,
    ) -> User:
        with SessionLocal() as session:
            return UserRepository(session).create(
                User(
                    id=None,
                    full_name=full_name,
                    email=email or f"{full_name.split()[0].lower()}-{role}@example.com",
                    password=password,
                    role=role,
                    is_active=is_active,
                    notification_preferences=preferences or {},
                )
            )

    return _make_user


@pytest.fixture
def make_lead():
    def _make_lead(**overrides) -> Lead:
        values = {
            "id": None,
            "name": "Asha Rao",
            "phone": "+919876543210",
            "email": "asha@example.com",
            "priority": "high",
            "loan_amount": Decimal("200000"),
            "loan_type": "Personal",
        }
        values.update(overrides)
        with SessionLocal() as session:
            return LeadRepository(session).create(Lead(**values))

    return _make_lead
