"""Token domain exports."""

from .exceptions import InvalidTokenError, TokenError, TokenExpiredError
from .models import AccessTokenClaims, RefreshTokenRecord, TokenPair

__all__ = [
    "AccessTokenClaims",
    "InvalidTokenError",
    "RefreshTokenRecord",
    "TokenError",
    "TokenExpiredError",
    "TokenPair",
]
