import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock

# Tests run against an in-memory SQLite database; set this before any
# module reads the settings.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "local"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ.setdefault("STUDENT_PASSWORD_SCHEME", "cpf_prefix")

# Local overrides (e.g. LOG_LEVEL) for running the suite
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=False)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from libs.auth.provider import SupabaseAuthProvider, get_auth_provider
from libs.common.config import get_settings
from libs.db.base import Base
from libs.db.session import get_async_db
from services.gateway_service.app.main import app

# Import all models so metadata includes every table
from services.attendance_service import models as _attendance_models  # noqa: F401
from services.members_service import models as _member_models  # noqa: F401
from services.plans_service import models as _plan_models  # noqa: F401
from services.workouts_service import models as _workout_models  # noqa: F401

get_settings.cache_clear()
settings = get_settings()


def _enable_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE CASCADE only fires with foreign keys switched on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def test_engine():
    """
    Fresh in-memory database per test, schema created from the models.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield the session shared by the test body and the app under test.
    """
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def auth_provider() -> AsyncMock:
    """Stand-in for Supabase Auth; configure return values per test."""
    provider = AsyncMock(spec=SupabaseAuthProvider)
    return provider


@pytest_asyncio.fixture
async def client(db_session, auth_provider) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient with the app and overridden DB / auth provider.
    """

    async def _get_test_db():
        yield db_session

    app.dependency_overrides[get_async_db] = _get_test_db
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
