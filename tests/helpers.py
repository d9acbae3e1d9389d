"""Auth helpers for API tests."""

import uuid
from contextlib import contextmanager
from typing import Optional

from fastapi import FastAPI
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser


def make_user(user_id: Optional[str] = None, email: Optional[str] = None) -> AuthUser:
    """Build the identity a verified Supabase token would carry."""
    user_id = user_id or str(uuid.uuid4())
    return AuthUser(
        user_id=user_id,
        email=email or f"user-{user_id[:8]}@test.com",
        role="authenticated",
        token="test-access-token",
    )


@contextmanager
def override_auth(app: FastAPI, user: AuthUser):
    """Make every request in the block authenticate as ``user``."""
    app.dependency_overrides[get_current_user] = lambda: user
    try:
        yield user
    finally:
        app.dependency_overrides.pop(get_current_user, None)


async def create_admin(db, **overrides):
    """Insert an admin profile and return ``(auth_user, profile)``."""
    from tests.factories import ProfileFactory

    user = make_user()
    profile = ProfileFactory.admin(user_id=uuid.UUID(user.user_id), **overrides)
    db.add(profile)
    await db.commit()
    return user, profile


async def create_student(db, **overrides):
    """Insert a student profile and return ``(auth_user, profile)``."""
    from tests.factories import ProfileFactory

    user = make_user()
    profile = ProfileFactory.create(user_id=uuid.UUID(user.user_id), **overrides)
    db.add(profile)
    await db.commit()
    return user, profile
