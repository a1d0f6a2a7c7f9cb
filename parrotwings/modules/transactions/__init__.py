"""Transaction history exports."""

from .models import AccountSummary, TransactionPage, TransactionQuery, TransactionView
from .service import TransactionQueryService

__all__ = [
    "AccountSummary",
    "TransactionPage",
    "TransactionQuery",
    "TransactionQueryService",
    "TransactionView",
]
