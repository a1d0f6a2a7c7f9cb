"""Repository protocol for the append-only transfer log."""

from __future__ import annotations

from typing import Protocol

from .models import TransferRecord


class TransferRepository(Protocol):
    async def add_transfer(self, *, sender_id: str, recipient_id: str, amount_cents: int) -> TransferRecord:
        ...
