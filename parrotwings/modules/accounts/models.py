"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.core.money import from_cents

AccountSortField = Literal["email", "full_name"]
SortOrder = Literal["asc", "desc"]


@dataclass(slots=True)
class Account:
    id: str
    email: str
    full_name: str
    balance_cents: int
    password_hash: str = field(repr=False)
    created_at: Optional[datetime] = None

    @property
    def balance(self) -> Decimal:
        return from_cents(self.balance_cents)


@dataclass(slots=True)
class AccountCreateInput:
    email: str
    password: str
    full_name: str


@dataclass(slots=True)
class AccountListQuery:
    email_filter: Optional[str] = None
    full_name_filter: Optional[str] = None
    sort_by: AccountSortField = "email"
    sort_order: SortOrder = "asc"
    start_index: int = 0
    count: int = 10

    def __post_init__(self) -> None:
        if self.sort_by not in ("email", "full_name"):
            raise ValueError(f"unsupported sort field: {self.sort_by}")
        if self.sort_order not in ("asc", "desc"):
            raise ValueError(f"unsupported sort order: {self.sort_order}")
        if not 0 <= self.start_index <= SQL_INTEGER_MAX:
            raise ValueError(f"start_index must be between 0 and {SQL_INTEGER_MAX}")
        if self.count <= 0:
            raise ValueError("count must be > 0")


@dataclass(slots=True)
class AccountPage:
    accounts: list[Account]
    total: int
