"""
Notes API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh in-memory SQLite database (aiosqlite +
       StaticPool, so every session shares the one connection), with the
       tables created from the ORM metadata.

Fixture Hierarchy (all function-scoped):
    engine ─► db_session ─┬─► users        (two seeded users: u1/alice, u2/bob)
                          ├─► note_service (NoteService over real stores)
                          ├─► test_client  (HTTPX AsyncClient, get_db_session overridden)
                          └─► server_error_client (same, app exceptions not re-raised)
"""

import os
from contextlib import asynccontextmanager

# Configure the app BEFORE any notes_api import reads settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notes_api.database import Base, get_db_session
from notes_api.models.note import Note  # noqa: F401
from notes_api.models.user import User
from notes_api.services.note_service import NoteService
from notes_api.stores import NoteStore, UserStore


@pytest_asyncio.fixture
async def engine():
    """In-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def users(db_session):
    """Seeds two users; notes in tests are owned by these ids."""
    seeded = [User(id="u1", username="alice"), User(id="u2", username="bob")]
    db_session.add_all(seeded)
    await db_session.commit()
    return {user.id: user for user in seeded}


@pytest.fixture
def note_service(db_session):
    return NoteService(notes=NoteStore(db_session), users=UserStore(db_session))


@asynccontextmanager
async def _client(db_session, raise_app_exceptions=True):
    from notes_api.main import app

    async def override_get_db_session():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(db_session):
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGI.

    Every request shares the test's session; the override commits after
    each successful request, as get_db_session does in production.
    """
    async with _client(db_session) as client:
        yield client


@pytest_asyncio.fixture
async def server_error_client(db_session):
    """
    Like test_client, but unhandled exceptions come back as the 500 response
    the app sends instead of being re-raised into the test.
    """
    async with _client(db_session, raise_app_exceptions=False) as client:
        yield client
