"""Providers for services that own their transaction boundary."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from parrotwings.core.config import get_settings
from parrotwings.modules.ledger import LedgerService
from parrotwings.modules.tokens.service import TokenService
from parrotwings.modules.transactions import TransactionQueryService

from .database import get_db_session, get_db_session_factory


def get_ledger_service(
    factory: async_sessionmaker[AsyncSession] = Depends(get_db_session_factory),
) -> LedgerService:
    return LedgerService.from_settings(factory, get_settings())


def get_token_service(
    factory: async_sessionmaker[AsyncSession] = Depends(get_db_session_factory),
) -> TokenService:
    return TokenService.from_settings(factory, get_settings())


def get_transaction_query_service(db: AsyncSession = Depends(get_db_session)) -> TransactionQueryService:
    return TransactionQueryService.with_session(db)


__all__ = ["get_ledger_service", "get_token_service", "get_transaction_query_service"]
