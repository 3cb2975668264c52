"""Shared fixtures for the friends-management test suite."""

import os

# Settings are read at import time; point them at an in-memory database
# before anything from ``app`` is imported.
os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models import Base
from app.db.session import get_db
from app.main import app
from app.services.user import create_user


ALICE = "alice@x.com"
BOB = "bob@x.com"
CAROL = "carol@x.com"
DAVE = "dave@x.com"
ERIN = "erin@x.com"

ACCOUNTS = [ALICE, BOB, CAROL, DAVE, ERIN]


@pytest.fixture
async def db_engine():
    """Fresh in-memory SQLite database with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def accounts(db) -> dict[str, str]:
    """Register every address in ``ACCOUNTS``; maps email -> account id."""
    ids = {}
    for email in ACCOUNTS:
        user = await create_user(db, email)
        ids[email] = user.id
    return ids


@pytest.fixture
async def client(session_factory):
    """HTTP client bound to the app, with ``get_db`` pointed at the test database."""

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
