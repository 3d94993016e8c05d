"""Primary key helpers shared by the ORM models."""

from uuid import uuid4


def new_id() -> str:
    return str(uuid4())
