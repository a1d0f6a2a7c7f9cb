"""Authentication endpoints: register, login, refresh, logout."""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from parrotwings.interfaces.http.deps import (
    client_context,
    get_account_service,
    get_current_account,
    get_db_session,
    get_token_service,
)
from parrotwings.modules.accounts import (
    Account,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountService,
    InvalidEmailError,
)
from parrotwings.modules.common import PersistenceError
from parrotwings.modules.tokens import InvalidTokenError, TokenPair
from parrotwings.modules.tokens.service import TokenService
from parrotwings.schemas import (
    AccountInfoResponse,
    LoginRequest,
    LogoutResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)

router = APIRouter()


def _unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service temporarily unavailable, please retry.",
    )


def _token_response(pair: TokenPair) -> TokenResponse:
    return TokenResponse(
        access_token=pair.access_token,
        token_type=pair.token_type,
        expires_at=pair.access_token_expires_at,
        refresh_token=pair.refresh_token,
        refresh_token_expires_at=pair.refresh_token_expires_at,
    )


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account with the starting balance",
)
async def register(
    payload: RegisterRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    try:
        account = await account_service.register(
            AccountCreateInput(email=payload.email, password=payload.password, full_name=payload.full_name)
        )
    except InvalidEmailError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AccountAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists.",
        ) from exc
    # Tokens are issued in their own transaction, which must see the new account.
    await db.commit()

    try:
        pair = await token_service.issue_initial_tokens(account.id, client_context(request))
    except PersistenceError as exc:
        raise _unavailable() from exc
    return _token_response(pair)


@router.post("/login", response_model=TokenResponse, summary="Exchange credentials for a token pair")
async def login(
    payload: LoginRequest,
    request: Request,
    account_service: AccountService = Depends(get_account_service),
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    account = await account_service.authenticate(payload.email, payload.password)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid login credentials.")

    try:
        pair = await token_service.issue_initial_tokens(account.id, client_context(request))
    except PersistenceError as exc:
        raise _unavailable() from exc
    return _token_response(pair)


@router.post("/refresh", response_model=TokenResponse, summary="Rotate a refresh token")
async def refresh(
    payload: RefreshRequest,
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    try:
        pair = await token_service.refresh(payload.refresh_token, client_context(request))
    except InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise _unavailable() from exc
    return _token_response(pair)


@router.post("/logout", response_model=LogoutResponse, summary="Revoke every refresh token of the caller")
async def logout(
    request: Request,
    account: Account = Depends(get_current_account),
    token_service: TokenService = Depends(get_token_service),
) -> LogoutResponse:
    try:
        revoked = await token_service.logout(account.id, client_context(request))
    except PersistenceError as exc:
        raise _unavailable() from exc
    return LogoutResponse(revoked=revoked)


@router.get("/info", response_model=AccountInfoResponse, summary="Current account details")
async def info(account: Account = Depends(get_current_account)) -> AccountInfoResponse:
    return AccountInfoResponse.model_validate(account)
