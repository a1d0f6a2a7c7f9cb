"""
Shared pytest fixtures.

Each test gets its own on-disk SQLite database so that concurrent sessions
use separate connections the way they would against a real deployment.
"""

from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from parrotwings.core.config import SecuritySettings
from parrotwings.core.crypto import hash_password
from parrotwings.core.money import from_cents, to_cents
from parrotwings.db.models import Transfer
from parrotwings.infrastructure.database.repositories import SqlAccountRepository
from parrotwings.infrastructure.database.session import build_session_factory, init_db
from parrotwings.modules.ledger import LedgerService
from parrotwings.modules.tokens.service import TokenService

TEST_PASSWORD = "parrot-pass-123"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt is slow on purpose, so hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncEngine:
    db_path = tmp_path / "parrotwings_test.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    return build_session_factory(engine)


@pytest.fixture
def security_settings() -> SecuritySettings:
    return SecuritySettings(
        secret_key="test-secret-key-for-parrotwings",
        access_token_expire_minutes=5,
        refresh_token_expire_days=1,
    )


@pytest.fixture
def ledger(session_factory) -> LedgerService:
    return LedgerService(session_factory, max_attempts=5, retry_backoff_seconds=0.01)


@pytest.fixture
def token_service(session_factory, security_settings: SecuritySettings) -> TokenService:
    return TokenService(session_factory, security=security_settings, retry_backoff_seconds=0.01)


@pytest.fixture
def create_account(session_factory, password_hash: str):
    """Insert an account directly, bypassing registration."""

    async def _create(email: str, full_name: str | None = None, balance: str = "500.00"):
        async with session_factory() as session:
            account = await SqlAccountRepository(session).create_account(
                email=email.lower(),
                full_name=full_name or email.split("@")[0].title(),
                password_hash=password_hash,
                balance_cents=to_cents(balance),
            )
            await session.commit()
            return account

    return _create


@pytest.fixture
def balance_of(session_factory):
    async def _balance(account_id: str) -> Decimal:
        async with session_factory() as session:
            account = await SqlAccountRepository(session).get_by_id(account_id)
            assert account is not None
            return from_cents(account.balance_cents)

    return _balance


@pytest.fixture
def transfer_count(session_factory):
    async def _count() -> int:
        async with session_factory() as session:
            return int(await session.scalar(select(func.count(Transfer.id))) or 0)

    return _count
