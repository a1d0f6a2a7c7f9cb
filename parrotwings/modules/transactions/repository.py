"""Repository protocol for reading the transfer log."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import TransactionQuery, TransactionView


class TransactionReadRepository(Protocol):
    async def search(self, account_id: str, query: TransactionQuery) -> tuple[Sequence[TransactionView], int]:
        """Return one page of matching records and the number of matches ignoring pagination."""
        ...
