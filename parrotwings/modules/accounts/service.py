"""Domain services for account management."""

from __future__ import annotations

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from parrotwings.core.config import get_settings
from parrotwings.core.crypto import hash_password, verify_password
from parrotwings.core.money import MoneyInput, to_cents

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError, InvalidEmailError
from .models import Account, AccountCreateInput, AccountListQuery, AccountPage
from .repository import AccountRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository, starting_balance: MoneyInput = "500.00") -> None:
        self._repository = repository
        self._starting_balance_cents = to_cents(starting_balance)

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        from parrotwings.infrastructure.database.repositories.account_repository import SqlAccountRepository

        settings = get_settings()
        return cls(SqlAccountRepository(session), starting_balance=settings.ledger.starting_balance)

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def resolve(self, email_or_id: str) -> Account | None:
        """Look an account up by email when the identifier looks like one, otherwise by id."""
        identifier = email_or_id.strip()
        if "@" in identifier:
            return await self.get_by_email(identifier)
        return await self.get_by_id(identifier)

    async def get_balance(self, account_id: str) -> int:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account.balance_cents

    async def list_accounts(self, query: AccountListQuery) -> AccountPage:
        accounts, total = await self._repository.list_accounts(query)
        return AccountPage(accounts=list(accounts), total=total)

    async def authenticate(self, email: str, password: str) -> Account | None:
        account = await self.get_by_email(email)
        if account is None:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def register(self, payload: AccountCreateInput) -> Account:
        email = normalize_email(payload.email)
        if not _EMAIL_RE.match(email):
            raise InvalidEmailError(f"Invalid email address: {payload.email}")

        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError(f"A user with this email already exists: {email}")

        try:
            account = await self._repository.create_account(
                email=email,
                full_name=payload.full_name.strip(),
                password_hash=hash_password(payload.password),
                balance_cents=self._starting_balance_cents,
            )
        except IntegrityError as exc:
            raise AccountAlreadyExistsError(f"A user with this email already exists: {email}") from exc

        logger.info("Registered account %s with starting balance %d cents", account.id, account.balance_cents)
        return account
