"""Transaction history queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .models import TransactionPage, TransactionQuery
from .repository import TransactionReadRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransactionQueryService:
    repository: TransactionReadRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionQueryService":
        from parrotwings.infrastructure.database.repositories import SqlTransferRepository

        return cls(SqlTransferRepository(session))

    async def list_transactions(self, account_id: str, query: TransactionQuery) -> TransactionPage:
        logger.debug(
            "Listing transactions for %s (filter=%r, sort=%s %s, start=%d, count=%d)",
            account_id,
            query.filter,
            query.sort_by,
            query.sort_order,
            query.start_index,
            query.count,
        )
        items, total = await self.repository.search(account_id, query)
        return TransactionPage(items=list(items), total_count=total)
