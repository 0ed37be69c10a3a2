"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool,
so all sessions share one connection) with tables created from the ORM
metadata, an in-memory blob store and its own Settings object.
"""

import os

# Cheap password hashing; must be set before vidshare is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import AsyncGenerator

import httpx
import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vidshare.api.dependencies.database import get_db
from vidshare.api.dependencies.services import get_blob_store
from vidshare.api.main import create_application
from vidshare.config.settings import Settings, get_settings
from vidshare.shared.models import Base, User

from tests.factories import FakeBlobStore, make_user


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def config() -> Settings:
    return Settings(
        ACCESS_TOKEN_SECRET="test-access-secret",
        REFRESH_TOKEN_SECRET="test-refresh-secret",
        DEFAULT_PAGE_SIZE=10,
        MAX_PAGE_SIZE=100,
        ALLOW_SELF_SUBSCRIPTION=False,
    )


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
async def alice(session) -> User:
    return await make_user(session, "alice")


@pytest.fixture
async def bob(session) -> User:
    return await make_user(session, "bob")


@pytest.fixture
async def carol(session) -> User:
    return await make_user(session, "carol")


# ═══════════════════════════════════════════════════════════════════════════════
# API
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def app(session_factory, config, blob_store):
    """Application wired to the test database, settings and blob store."""
    app = create_application()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: config
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    return app


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
