"""
Pytest fixtures - file-backed SQLite per test, sessions, a persisted user.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from accounts.db.base import Base
from accounts.db.models import User
from accounts.db.repositories.user_repository import UserRepository
from accounts.db.session import make_session_maker
from accounts.services.account_service import AccountService
from accounts.storage.blob_store import LocalBlobStore

TEST_PASSWORD = "password"


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return make_session_maker(engine)


@pytest_asyncio.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as s:
        yield s


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "blobs")


@pytest.fixture
def make_user(session: AsyncSession):
    """Create and commit accounts through the real creation flow."""

    async def _make(name: str, email: str | None = None, password: str = TEST_PASSWORD) -> User:
        service = AccountService(UserRepository(session))
        user = await service.create_account(name, email or f"{name}@example.com", password)
        await session.commit()
        return user

    return _make


@pytest_asyncio.fixture
async def test_user(make_user) -> User:
    return await make_user("tester", "test@example.com")
