"""Token domain specific exceptions."""


class TokenError(Exception):
    """Base class for credential errors."""


class InvalidTokenError(TokenError):
    """Raised for unknown, revoked, expired or tampered tokens.

    Refresh rejections always carry the same message whatever the cause.
    """


class TokenExpiredError(InvalidTokenError):
    """Raised when an access token's signature is valid but its lifetime has elapsed."""
