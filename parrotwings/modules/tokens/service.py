"""Credential lifecycle: access/refresh token issuance, rotation and revocation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from parrotwings.core.clock import utcnow
from parrotwings.core.config import SecuritySettings, Settings, get_settings
from parrotwings.core.crypto import generate_token_value, hash_token_value
from parrotwings.core.security import create_access_token, decode_access_token
from parrotwings.db.models import generate_uuid
from parrotwings.infrastructure.database.session import run_in_transaction
from parrotwings.modules.accounts.models import Account
from parrotwings.modules.accounts.repository import AccountRepository

from .exceptions import InvalidTokenError
from .models import AccessTokenClaims, RefreshTokenRecord, TokenPair
from .repository import RefreshTokenRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Single message for every refresh rejection so callers cannot tell unknown from revoked or expired.
INVALID_REFRESH_TOKEN = "Invalid refresh token."
_MAX_CONTEXT_LENGTH = 64

RepositoryFactory = Callable[[AsyncSession], tuple[AccountRepository, RefreshTokenRepository]]


def sql_repositories(session: AsyncSession) -> tuple[AccountRepository, RefreshTokenRepository]:
    from parrotwings.infrastructure.database.repositories import SqlAccountRepository, SqlRefreshTokenRepository

    return SqlAccountRepository(session), SqlRefreshTokenRepository(session)


def _context(client_context: Optional[str]) -> str:
    return (client_context or "unknown")[:_MAX_CONTEXT_LENGTH]


@dataclass(slots=True)
class TokenService:
    """Issues short-lived access tokens paired with single-use refresh tokens.

    Refresh tokens are stored as SHA-256 digests. Rotation revokes the
    presented token and inserts its replacement in one transaction, so a
    refresh chain stays linear and a replayed token never wins twice.
    Access tokens are validated statelessly and stay valid until their own
    expiry even after logout.
    """

    session_factory: async_sessionmaker[AsyncSession]
    security: SecuritySettings = field(default_factory=SecuritySettings)
    max_attempts: int = 3
    retry_backoff_seconds: float = 0.05
    repositories: RepositoryFactory = field(default=sql_repositories)

    @classmethod
    def from_settings(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Optional[Settings] = None,
    ) -> "TokenService":
        settings = settings or get_settings()
        return cls(
            session_factory=session_factory,
            security=settings.security,
            max_attempts=settings.ledger.max_attempts,
            retry_backoff_seconds=settings.ledger.retry_backoff_seconds,
        )

    async def issue_initial_tokens(self, account_id: str, client_context: Optional[str]) -> TokenPair:
        context = _context(client_context)

        async def issue(session: AsyncSession) -> TokenPair:
            accounts, tokens = self.repositories(session)
            account = await accounts.get_by_id(account_id)
            if account is None:
                raise InvalidTokenError("Unknown account.")
            return await self._issue_pair(tokens, account, context, token_id=generate_uuid())

        pair = await self._run(issue, "issue tokens")
        logger.info("Issued token pair for account %s from %s", account_id, context)
        return pair

    async def refresh(self, refresh_token_value: str, client_context: Optional[str]) -> TokenPair:
        context = _context(client_context)
        token_hash = hash_token_value(refresh_token_value or "")

        async def rotate(session: AsyncSession) -> TokenPair:
            accounts, tokens = self.repositories(session)
            replacement_id = generate_uuid()
            consumed = await tokens.consume_active(
                token_hash,
                now=utcnow(),
                revoked_by_ip=context,
                replaced_by_token_id=replacement_id,
            )
            if consumed is None:
                raise InvalidTokenError(INVALID_REFRESH_TOKEN)
            account = await accounts.get_by_id(consumed.account_id)
            if account is None:
                raise InvalidTokenError(INVALID_REFRESH_TOKEN)
            return await self._issue_pair(tokens, account, context, token_id=replacement_id)

        try:
            pair = await self._run(rotate, "refresh")
        except InvalidTokenError:
            logger.warning("Rejected refresh attempt from %s", context)
            raise
        logger.info("Rotated refresh token into %s", pair.refresh_token_id)
        return pair

    async def logout(self, account_id: str, client_context: Optional[str]) -> int:
        context = _context(client_context)

        async def revoke(session: AsyncSession) -> int:
            _, tokens = self.repositories(session)
            return await tokens.revoke_all_active(account_id, now=utcnow(), revoked_by_ip=context)

        revoked = await self._run(revoke, "logout")
        logger.info("Logout for account %s revoked %d refresh token(s)", account_id, revoked)
        return revoked

    def validate_access(self, access_token: str) -> AccessTokenClaims:
        return decode_access_token(access_token, self.security)

    async def find_by_value(self, refresh_token_value: str) -> RefreshTokenRecord | None:
        async with self.session_factory() as session:
            _, tokens = self.repositories(session)
            return await tokens.get_by_hash(hash_token_value(refresh_token_value))

    async def get_chain(self, token_id: str) -> list[RefreshTokenRecord]:
        """Follow ``replaced_by_token_id`` links starting at ``token_id``."""
        chain: list[RefreshTokenRecord] = []
        seen: set[str] = set()
        async with self.session_factory() as session:
            _, tokens = self.repositories(session)
            current = await tokens.get_by_id(token_id)
            while current is not None and current.id not in seen:
                chain.append(current)
                seen.add(current.id)
                if current.replaced_by_token_id is None:
                    break
                current = await tokens.get_by_id(current.replaced_by_token_id)
        return chain

    async def _issue_pair(
        self,
        tokens: RefreshTokenRepository,
        account: Account,
        context: str,
        *,
        token_id: str,
    ) -> TokenPair:
        now = utcnow()
        refresh_value = generate_token_value(self.security.refresh_token_bytes)
        record = await tokens.create(
            token_id=token_id,
            token_hash=hash_token_value(refresh_value),
            account_id=account.id,
            created_at=now,
            created_by_ip=context,
            expires_at=now + timedelta(days=self.security.refresh_token_expire_days),
        )
        access_token, access_expires_at = create_access_token(
            account.id,
            account.email,
            account.full_name,
            settings=self.security,
        )
        return TokenPair(
            access_token=access_token,
            access_token_expires_at=access_expires_at,
            refresh_token=refresh_value,
            refresh_token_id=record.id,
            refresh_token_expires_at=record.expires_at,
        )

    async def _run(self, operation: Callable[[AsyncSession], Awaitable[T]], name: str) -> T:
        return await run_in_transaction(
            self.session_factory,
            operation,
            max_attempts=self.max_attempts,
            backoff_seconds=self.retry_backoff_seconds,
            name=name,
        )
