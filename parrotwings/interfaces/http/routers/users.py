"""User directory and balance endpoints."""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.interfaces.http.deps import get_account_service, get_current_account
from parrotwings.modules.accounts import Account, AccountListQuery, AccountService
from parrotwings.schemas import AccountInfoResponse, BalanceResponse, UserListResponse

router = APIRouter()


@router.get("", response_model=UserListResponse, summary="Search registered users")
async def list_users(
    start_index: int = Query(0, ge=0, le=SQL_INTEGER_MAX),
    count: int = Query(10, gt=0, le=100),
    sort_by: Literal["email", "full_name"] = "email",
    sort_order: Literal["asc", "desc"] = "asc",
    email_filter: Optional[str] = None,
    full_name_filter: Optional[str] = None,
    _: Account = Depends(get_current_account),
    account_service: AccountService = Depends(get_account_service),
) -> UserListResponse:
    try:
        query = AccountListQuery(
            email_filter=email_filter,
            full_name_filter=full_name_filter,
            sort_by=sort_by,
            sort_order=sort_order,
            start_index=start_index,
            count=count,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    page = await account_service.list_accounts(query)
    return UserListResponse(
        users=[AccountInfoResponse.model_validate(account) for account in page.accounts],
        total_count=page.total,
    )


@router.get("/me/balance", response_model=BalanceResponse, summary="Current account balance")
async def my_balance(account: Account = Depends(get_current_account)) -> BalanceResponse:
    return BalanceResponse(balance=account.balance, balance_cents=account.balance_cents)
