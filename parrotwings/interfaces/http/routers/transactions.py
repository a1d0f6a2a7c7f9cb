"""Transfer and transaction-history endpoints."""
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.interfaces.http.deps import (
    get_current_account,
    get_ledger_service,
    get_transaction_query_service,
)
from parrotwings.modules.accounts import Account
from parrotwings.modules.common import ConcurrencyConflictError, StorageUnavailableError
from parrotwings.modules.ledger import (
    InsufficientFundsError,
    InvalidAmountError,
    LedgerService,
    RecipientNotFoundError,
    SelfTransferError,
    SenderNotFoundError,
)
from parrotwings.modules.transactions import TransactionQuery, TransactionQueryService, TransactionView
from parrotwings.schemas import (
    AccountInfoResponse,
    TransactionListResponse,
    TransactionResponse,
    TransferRequest,
    TransferResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(view: TransactionView) -> TransactionResponse:
    return TransactionResponse(
        id=view.id,
        created_at=view.created_at,
        sender=AccountInfoResponse.model_validate(view.sender),
        recipient=AccountInfoResponse.model_validate(view.recipient),
        amount=view.amount,
        direction=view.direction,
    )


@router.get("", response_model=TransactionListResponse, summary="Transaction history of the caller")
async def list_transactions(
    filter: Optional[str] = None,
    sort_by: Literal["date", "amount"] = "date",
    sort_order: Literal["asc", "desc"] = "asc",
    start_index: int = Query(0, ge=0, le=SQL_INTEGER_MAX),
    count: int = Query(10, gt=0, le=100),
    account: Account = Depends(get_current_account),
    query_service: TransactionQueryService = Depends(get_transaction_query_service),
) -> TransactionListResponse:
    try:
        query = TransactionQuery(
            filter=filter,
            sort_by=sort_by,
            sort_order=sort_order,
            start_index=start_index,
            count=count,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    page = await query_service.list_transactions(account.id, query)
    return TransactionListResponse(
        transactions=[_to_response(view) for view in page.items],
        total_count=page.total_count,
    )


@router.post("", response_model=TransferResponse, status_code=status.HTTP_201_CREATED, summary="Transfer funds")
async def create_transfer(
    payload: TransferRequest,
    account: Account = Depends(get_current_account),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransferResponse:
    try:
        record = await ledger.transfer(account.id, payload.recipient, payload.amount)
    except (InvalidAmountError, SelfTransferError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RecipientNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipient not found.") from exc
    except SenderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account no longer exists.") from exc
    except InsufficientFundsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Insufficient funds.") from exc
    except (ConcurrencyConflictError, StorageUnavailableError) as exc:
        logger.error("Transfer from %s failed: %s", account.id, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Transfer could not be completed, please retry.",
        ) from exc

    return TransferResponse(
        id=record.id,
        sender_id=record.sender_id,
        recipient_id=record.recipient_id,
        amount=record.amount,
        created_at=record.created_at,
    )
