"""Domain models for ledger transfers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from parrotwings.core.money import from_cents


@dataclass(frozen=True, slots=True)
class TransferRecord:
    id: str
    sender_id: str
    recipient_id: str
    amount_cents: int
    created_at: datetime

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)
