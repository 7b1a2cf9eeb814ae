"""Shared fixtures: in-memory database and access tokens."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import yummify.models  # noqa: F401
from yummify.core.config import get_settings
from yummify.database import Base
from yummify.services.token_service import TokenService

TEST_SECRET = "test-secret"


@pytest_asyncio.fixture
async def session():
    """Fresh SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as db:
        yield db

    await engine.dispose()


@pytest.fixture
def token_service():
    """Token service verifying HS256 tokens signed with the test secret."""
    return TokenService(key=TEST_SECRET, algorithm="HS256")


def make_token(
    restaurant_id=None,
    user_id=None,
    secret: str = TEST_SECRET,
    expires_in: timedelta = timedelta(minutes=5),
    **claims,
) -> str:
    """Sign an access token the way the identity provider would."""
    payload = {"exp": datetime.now(timezone.utc) + expires_in, **claims}
    if restaurant_id is not None:
        payload["restaurantId"] = str(restaurant_id) if isinstance(restaurant_id, UUID) else restaurant_id
    if user_id is not None:
        payload["sub"] = str(user_id)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def fresh_settings():
    """Reload settings from the (monkeypatched) environment for one test."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


@pytest.fixture
def token_factory():
    return make_token
