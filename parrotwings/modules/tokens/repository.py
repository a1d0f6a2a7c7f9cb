"""Repository protocol for refresh tokens."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .models import RefreshTokenRecord


class RefreshTokenRepository(Protocol):
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
        ...

    async def consume_active(
        self,
        token_hash: str,
        *,
        now: datetime,
        revoked_by_ip: str,
        replaced_by_token_id: str,
    ) -> RefreshTokenRecord | None:
        """Revoke the token if it is still active and return it; None when nothing was revoked.

        Lookup and revocation are one statement so concurrent callers
        presenting the same value cannot both succeed.
        """
        ...

    async def revoke_all_active(self, account_id: str, *, now: datetime, revoked_by_ip: str) -> int:
        ...

    async def get_by_id(self, token_id: str) -> RefreshTokenRecord | None:
        ...

    async def get_by_hash(self, token_hash: str) -> RefreshTokenRecord | None:
        ...
