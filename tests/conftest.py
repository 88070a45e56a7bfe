"""Pytest configuration and fixtures."""
import os

os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.main import app
from app.models.note import Note
from app.models.project import Project
from app.models.task import Task
from app.models.user import User
from app.services.auth import create_jwt
from app.utils.database import Base, get_session


@pytest_asyncio.fixture
async def db_session():
    """Create an in-memory test database session."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session_factory() as session:
        async def override_get_session():
            yield session
        app.dependency_overrides[get_session] = override_get_session
        yield session
        app.dependency_overrides.clear()

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# -----------------------------------------------------------------------------
# Users and auth
# -----------------------------------------------------------------------------

@pytest_asyncio.fixture
async def test_user(db_session):
    user = User(id=1, email="ada@example.com", first_name="Ada", last_name="Lovelace")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def auth_headers(test_user):
    return {"Authorization": f"Bearer {create_jwt(test_user.id)}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {create_jwt(2)}"}


# -----------------------------------------------------------------------------
# Entities
# -----------------------------------------------------------------------------

@pytest_asyncio.fixture
async def task(db_session):
    row = Task(title="Write report", status="todo", priority="medium", created_by=1, workspace_id=7)
    db_session.add(row)
    await db_session.commit()
    return row


@pytest_asyncio.fixture
async def project(db_session):
    row = Project(name="Launch", description="Q3 launch", workspace_id=7, created_by=1)
    db_session.add(row)
    await db_session.commit()
    return row


@pytest_asyncio.fixture
async def note(db_session):
    row = Note(title="Standup", content="nothing yet", created_by=1)
    db_session.add(row)
    await db_session.commit()
    return row
