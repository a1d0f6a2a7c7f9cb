"""JWT access-token helpers."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from parrotwings.core.config import SecuritySettings, get_settings
from parrotwings.modules.tokens.exceptions import InvalidTokenError, TokenExpiredError
from parrotwings.modules.tokens.models import AccessTokenClaims


def _security(settings: Optional[SecuritySettings]) -> SecuritySettings:
    return settings or get_settings().security


def create_access_token(
    account_id: str,
    email: str,
    full_name: str,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[SecuritySettings] = None,
) -> tuple[str, datetime]:
    """Return a signed access token and its expiry time."""
    security = _security(settings)
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (expires_delta or timedelta(minutes=security.access_token_expire_minutes))
    payload = {
        "sub": account_id,
        "iat": issued_at,
        "exp": expires_at,
        "jti": str(uuid.uuid4()),
        "preferred_username": full_name,
        "email": email,
        "iss": security.issuer,
        "aud": security.audience,
    }
    token = jwt.encode(payload, security.secret_key, algorithm=security.algorithm)
    return token, expires_at


def decode_access_token(token: str, settings: Optional[SecuritySettings] = None) -> AccessTokenClaims:
    """Check signature, issuer, audience and expiry. No store lookup happens here."""
    security = _security(settings)
    try:
        payload = jwt.decode(
            token,
            security.secret_key,
            algorithms=[security.algorithm],
            audience=security.audience,
            issuer=security.issuer,
        )
    except ExpiredSignatureError as exc:
        raise TokenExpiredError("Access token has expired.") from exc
    except JWTError as exc:
        raise InvalidTokenError("Could not validate credentials.") from exc

    account_id = payload.get("sub")
    jti = payload.get("jti")
    if not account_id or not jti:
        raise InvalidTokenError("Could not validate credentials.")
    return AccessTokenClaims(
        account_id=account_id,
        email=payload.get("email", ""),
        full_name=payload.get("preferred_username", ""),
        token_id=jti,
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc) if "iat" in payload else None,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


__all__ = ["create_access_token", "decode_access_token"]
