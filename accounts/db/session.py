"""
Async database session management.
Design: Engine built lazily from settings; one session per unit of work;
run_in_transaction gives multi-step writes a single commit-or-rollback scope.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from accounts.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_engine() -> AsyncEngine:
    """Async engine with connection pool, created on first use."""
    settings = get_settings()
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,  # Verify connections before use
        pool_size=10,
        max_overflow=20,
    )


def make_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@lru_cache
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return make_session_maker(get_engine())


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of run_in_transaction. Truthy only when the work committed."""

    ok: bool
    error: Optional[BaseException] = None

    def __bool__(self) -> bool:
        return self.ok


async def run_in_transaction(
    session_maker: async_sessionmaker[AsyncSession],
    work: Callable[[AsyncSession], Awaitable[None]],
) -> TransactionResult:
    """
    Run `work` inside one transaction on a fresh session.
    Any exception rolls the whole scope back and comes back as a failed result
    instead of propagating; the cause is logged here and kept on the result.
    """
    try:
        async with session_maker() as session:
            async with session.begin():
                await work(session)
    except Exception as exc:
        logger.warning("transaction rolled back: %s", exc, exc_info=True)
        return TransactionResult(ok=False, error=exc)
    return TransactionResult(ok=True)
