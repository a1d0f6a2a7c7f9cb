"""Bearer-token authentication dependencies."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from parrotwings.modules.accounts import Account, AccountService
from parrotwings.modules.tokens import AccessTokenClaims, InvalidTokenError, TokenExpiredError
from parrotwings.modules.tokens.service import TokenService

from .account import get_account_service
from .services import get_token_service

security = HTTPBearer()


def client_context(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def get_current_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> AccessTokenClaims:
    try:
        return token_service.validate_access(credentials.credentials)
    except TokenExpiredError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token has expired.",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials.",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


async def get_current_account(
    claims: AccessTokenClaims = Depends(get_current_claims),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    account = await account_service.get_by_id(claims.account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account no longer exists.")
    return account


__all__ = ["client_context", "get_current_account", "get_current_claims", "security"]
