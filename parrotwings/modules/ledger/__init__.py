"""Ledger engine exports."""

from .exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    LedgerError,
    RecipientNotFoundError,
    SelfTransferError,
    SenderNotFoundError,
)
from .models import TransferRecord
from .service import LedgerService

__all__ = [
    "InsufficientFundsError",
    "InvalidAmountError",
    "LedgerError",
    "LedgerService",
    "RecipientNotFoundError",
    "SelfTransferError",
    "SenderNotFoundError",
    "TransferRecord",
]
