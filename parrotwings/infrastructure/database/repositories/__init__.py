"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .refresh_token_repository import SqlRefreshTokenRepository
from .transfer_repository import SqlTransferRepository

__all__ = [
    "SqlAccountRepository",
    "SqlRefreshTokenRepository",
    "SqlTransferRepository",
]
