"""Domain models for access and refresh tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class AccessTokenClaims:
    account_id: str
    email: str
    full_name: str
    token_id: str
    issued_at: Optional[datetime]
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    id: str
    account_id: str
    created_at: datetime
    created_by_ip: str
    expires_at: datetime
    revoked_at: Optional[datetime] = None
    revoked_by_ip: Optional[str] = None
    replaced_by_token_id: Optional[str] = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_active(self, now: datetime) -> bool:
        return self.revoked_at is None and not self.is_expired(now)


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    refresh_token_id: str
    refresh_token_expires_at: datetime
    token_type: str = "bearer"
