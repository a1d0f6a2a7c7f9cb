"""Async SQLAlchemy engine, session management and transactional execution."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from parrotwings.core.config import get_settings
from parrotwings.infrastructure.database.base import Base
from parrotwings.modules.common.exceptions import ConcurrencyConflictError, StorageUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None

# SQLSTATE codes for serialization failure and deadlock.
_RETRYABLE_SQLSTATES = {"40001", "40P01"}
_RETRYABLE_MESSAGES = ("database is locked", "database table is locked")


def _build_engine() -> AsyncEngine:
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database.echo,
        "future": True,
    }
    if settings.database.pool_size is not None:
        engine_kwargs["pool_size"] = settings.database.pool_size
    if settings.database.max_overflow is not None:
        engine_kwargs["max_overflow"] = settings.database.max_overflow

    return create_async_engine(settings.database_url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        _engine = _build_engine()
        AsyncSessionFactory = build_session_factory(_engine)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if AsyncSessionFactory is None:
        get_engine()
    assert AsyncSessionFactory is not None  # for mypy
    return AsyncSessionFactory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create database tables in development mode (migrations preferred)."""
    # Deferred import keeps model registration out of module import time.
    from parrotwings.db import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, AsyncSessionFactory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    AsyncSessionFactory = None


def is_retryable_conflict(exc: DBAPIError) -> bool:
    """True for lock contention and serialization failures that a fresh attempt may clear."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(fragment in message for fragment in _RETRYABLE_MESSAGES)


async def run_in_transaction(
    session_factory: async_sessionmaker[AsyncSession],
    operation: Callable[[AsyncSession], Awaitable[T]],
    *,
    max_attempts: int = 3,
    backoff_seconds: float = 0.05,
    name: str = "transaction",
) -> T:
    """Run ``operation`` in its own session and commit it as one unit.

    Every attempt gets a fresh session. Any exception rolls the attempt back.
    Lock and serialization conflicts are retried up to ``max_attempts``;
    integrity and domain errors propagate unchanged; any other database
    error surfaces as :class:`StorageUnavailableError`.
    """
    for attempt in range(1, max_attempts + 1):
        async with session_factory() as session:
            try:
                result = await operation(session)
                await session.commit()
                return result
            except IntegrityError:
                await session.rollback()
                raise
            except DBAPIError as exc:
                await session.rollback()
                if not is_retryable_conflict(exc):
                    logger.error("%s failed on storage error: %s", name, exc.orig)
                    raise StorageUnavailableError(f"{name} could not be completed") from exc
                if attempt == max_attempts:
                    logger.warning("%s gave up after %d conflicting attempts", name, attempt)
                    raise ConcurrencyConflictError(
                        f"{name} conflicted with concurrent updates, please retry"
                    ) from exc
                logger.warning("%s conflicted (attempt %d/%d), retrying", name, attempt, max_attempts)
            except Exception:
                await session.rollback()
                raise
        await asyncio.sleep(backoff_seconds * attempt)

    raise AssertionError("unreachable")  # pragma: no cover
