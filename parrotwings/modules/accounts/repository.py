"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Account, AccountListQuery


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        ...

    async def list_accounts(self, query: AccountListQuery) -> tuple[Sequence[Account], int]:
        ...

    async def create_account(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        balance_cents: int,
    ) -> Account:
        ...

    async def lock_for_update(self, account_ids: Sequence[str]) -> Sequence[Account]:
        """Lock the given rows until the surrounding transaction ends, in ascending id order."""
        ...

    async def debit_if_sufficient(self, account_id: str, amount_cents: int) -> int | None:
        """Subtract ``amount_cents`` only if the balance covers it; return the new balance or None."""
        ...

    async def credit(self, account_id: str, amount_cents: int) -> int | None:
        ...
