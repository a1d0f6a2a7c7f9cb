"""Read models for transaction history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.core.money import from_cents

TransactionSortField = Literal["date", "amount"]
SortOrder = Literal["asc", "desc"]
Direction = Literal["incoming", "outgoing"]


@dataclass(slots=True)
class TransactionQuery:
    filter: Optional[str] = None
    sort_by: TransactionSortField = "date"
    sort_order: SortOrder = "asc"
    start_index: int = 0
    count: int = 10

    def __post_init__(self) -> None:
        self.sort_by = (self.sort_by or "date").lower()  # type: ignore[assignment]
        self.sort_order = (self.sort_order or "asc").lower()  # type: ignore[assignment]
        if self.sort_by not in ("date", "amount"):
            raise ValueError(f"unsupported sort field: {self.sort_by}")
        if self.sort_order not in ("asc", "desc"):
            raise ValueError(f"unsupported sort order: {self.sort_order}")
        if not 0 <= self.start_index <= SQL_INTEGER_MAX:
            raise ValueError(f"start_index must be between 0 and {SQL_INTEGER_MAX}")
        if self.count <= 0:
            raise ValueError("count must be > 0")
        if self.filter is not None:
            self.filter = self.filter.strip() or None


@dataclass(frozen=True, slots=True)
class AccountSummary:
    id: str
    email: str
    full_name: str


@dataclass(frozen=True, slots=True)
class TransactionView:
    id: str
    created_at: datetime
    sender: AccountSummary
    recipient: AccountSummary
    amount_cents: int
    direction: Direction

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)


@dataclass(slots=True)
class TransactionPage:
    items: list[TransactionView]
    total_count: int
