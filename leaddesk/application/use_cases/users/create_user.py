"""Use case for creating dashboard users."""

from sqlalchemy.orm import Session

from leaddesk.domain.entities import ROLE_ADMIN, ROLE_TELECALLER, User
from leaddesk.infrastructure.repositories import UserRepository
from leaddesk.infrastructure.security import get_password_hash

ALLOWED_ROLES = (ROLE_ADMIN, ROLE_TELECALLER)


def create_user(
    session: Session,
    *,
    full_name: str,
    email: str,
    password: str,
    role: str = ROLE_TELECALLER,
) -> User:
    """Create a user with a hashed password."""

    if role not in ALLOWED_ROLES:
        raise ValueError(f"Role must be one of: {', '.join(ALLOWED_ROLES)}")
    if not full_name.strip():
        raise ValueError("Full name is required")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("Email is already registered")

    return repository.create(
        User(
            id=None,
            full_name=full_name.strip(),
            email=email,
            password=get_password_hash(password),
            role=role,
        )
    )
