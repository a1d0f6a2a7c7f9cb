"""Reusable FastAPI dependencies."""

from .database import get_db_session, get_db_session_factory
from .account import get_account_repository, get_account_service
from .services import get_ledger_service, get_token_service, get_transaction_query_service
from .auth import client_context, get_current_account, get_current_claims

__all__ = [
    "client_context",
    "get_account_repository",
    "get_account_service",
    "get_current_account",
    "get_current_claims",
    "get_db_session",
    "get_db_session_factory",
    "get_ledger_service",
    "get_token_service",
    "get_transaction_query_service",
]
