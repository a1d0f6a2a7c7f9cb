"""SQLAlchemy implementation of the refresh-token store."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update

from parrotwings.core.clock import as_utc
from parrotwings.db.models import RefreshToken
from parrotwings.modules.common.repository import AsyncRepository
from parrotwings.modules.tokens.models import RefreshTokenRecord
from parrotwings.modules.tokens.repository import RefreshTokenRepository


class SqlRefreshTokenRepository(AsyncRepository[RefreshToken], RefreshTokenRepository):
    async def create(
        self,
        *,
        token_id: str,
        token_hash: str,
        account_id: str,
        created_at: datetime,
        created_by_ip: str,
        expires_at: datetime,
    ) -> RefreshTokenRecord:
        model = await self.add(
            RefreshToken(
                id=token_id,
                token_hash=token_hash,
                account_id=account_id,
                created_at=created_at,
                created_by_ip=created_by_ip,
                expires_at=expires_at,
            )
        )
        return self._to_domain(model)

    async def consume_active(
        self,
        token_hash: str,
        *,
        now: datetime,
        revoked_by_ip: str,
        replaced_by_token_id: str,
    ) -> RefreshTokenRecord | None:
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.token_hash == token_hash,
                RefreshToken.revoked_at.is_(None),
                RefreshToken.expires_at > now,
            )
            .values(
                revoked_at=now,
                revoked_by_ip=revoked_by_ip,
                replaced_by_token_id=replaced_by_token_id,
            )
            .execution_options(synchronize_session="fetch")
            .returning(RefreshToken)
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model is not None else None

    async def revoke_all_active(self, account_id: str, *, now: datetime, revoked_by_ip: str) -> int:
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.account_id == account_id,
                RefreshToken.revoked_at.is_(None),
                RefreshToken.expires_at > now,
            )
            .values(revoked_at=now, revoked_by_ip=revoked_by_ip)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def get_by_id(self, token_id: str) -> RefreshTokenRecord | None:
        model = await self.session.get(RefreshToken, token_id)
        return self._to_domain(model) if model is not None else None

    async def get_by_hash(self, token_hash: str) -> RefreshTokenRecord | None:
        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model is not None else None

    @staticmethod
    def _to_domain(model: RefreshToken) -> RefreshTokenRecord:
        return RefreshTokenRecord(
            id=model.id,
            account_id=model.account_id,
            created_at=as_utc(model.created_at),
            created_by_ip=model.created_by_ip or "",
            expires_at=as_utc(model.expires_at),
            revoked_at=as_utc(model.revoked_at),
            revoked_by_ip=model.revoked_by_ip,
            replaced_by_token_id=model.replaced_by_token_id,
        )
