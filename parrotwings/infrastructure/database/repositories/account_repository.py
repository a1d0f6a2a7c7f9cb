"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import asc, desc, func, select, update

from parrotwings.core.clock import as_utc
from parrotwings.db.models import Account as AccountModel
from parrotwings.modules.accounts.models import Account, AccountListQuery
from parrotwings.modules.accounts.repository import AccountRepository
from parrotwings.modules.common.repository import AsyncRepository


class SqlAccountRepository(AsyncRepository[AccountModel], AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    async def get_by_id(self, account_id: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self.session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(func.lower(AccountModel.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_accounts(self, query: AccountListQuery) -> tuple[Sequence[Account], int]:
        stmt = select(AccountModel)
        if query.email_filter:
            stmt = stmt.where(AccountModel.email.icontains(query.email_filter, autoescape=True))
        if query.full_name_filter:
            stmt = stmt.where(AccountModel.full_name.icontains(query.full_name_filter, autoescape=True))

        total = await self.session.scalar(select(func.count()).select_from(stmt.subquery()))

        column = AccountModel.full_name if query.sort_by == "full_name" else AccountModel.email
        direction = desc if query.sort_order == "desc" else asc
        stmt = (
            stmt.order_by(direction(column), direction(AccountModel.id))
            .offset(query.start_index)
            .limit(query.count)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()], int(total or 0)

    async def create_account(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        balance_cents: int,
    ) -> Account:
        model = await self.add(
            AccountModel(
                email=email,
                full_name=full_name,
                password_hash=password_hash,
                balance_cents=balance_cents,
            )
        )
        return self._to_domain(model)

    async def lock_for_update(self, account_ids: Sequence[str]) -> Sequence[Account]:
        # Ascending id order keeps lock acquisition consistent across transfers in both directions.
        stmt = (
            select(AccountModel)
            .where(AccountModel.id.in_(sorted(set(account_ids))))
            .order_by(AccountModel.id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def debit_if_sufficient(self, account_id: str, amount_cents: int) -> int | None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id, AccountModel.balance_cents >= amount_cents)
            .values(balance_cents=AccountModel.balance_cents - amount_cents)
            .execution_options(synchronize_session="fetch")
            .returning(AccountModel.balance_cents)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def credit(self, account_id: str, amount_cents: int) -> int | None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(balance_cents=AccountModel.balance_cents + amount_cents)
            .execution_options(synchronize_session="fetch")
            .returning(AccountModel.balance_cents)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            email=model.email,
            full_name=model.full_name,
            balance_cents=int(model.balance_cents),
            password_hash=model.password_hash,
            created_at=as_utc(model.created_at),
        )
