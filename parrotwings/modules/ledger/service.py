"""Ledger engine: validates and atomically applies transfers between accounts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from parrotwings.core.config import Settings, get_settings
from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.core.money import MoneyFormatError, MoneyInput, to_cents
from parrotwings.infrastructure.database.session import run_in_transaction
from parrotwings.modules.accounts.repository import AccountRepository
from parrotwings.modules.accounts.service import AccountService

from .exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    LedgerError,
    RecipientNotFoundError,
    SelfTransferError,
    SenderNotFoundError,
)
from .models import TransferRecord
from .repository import TransferRepository

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[AsyncSession], tuple[AccountRepository, TransferRepository]]


def sql_repositories(session: AsyncSession) -> tuple[AccountRepository, TransferRepository]:
    from parrotwings.infrastructure.database.repositories import SqlAccountRepository, SqlTransferRepository

    return SqlAccountRepository(session), SqlTransferRepository(session)


@dataclass(slots=True)
class LedgerService:
    """Applies each transfer exactly once or rejects it with a specific reason.

    A transfer runs in its own database transaction: debit, credit and the
    transfer record commit together or not at all. The debit is a single
    conditional statement (``balance >= amount``) so two transfers racing on
    the same sender can never both spend the same funds; lock contention is
    retried a bounded number of times.
    """

    session_factory: async_sessionmaker[AsyncSession]
    max_attempts: int = 3
    retry_backoff_seconds: float = 0.05
    repositories: RepositoryFactory = field(default=sql_repositories)

    @classmethod
    def from_settings(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Optional[Settings] = None,
    ) -> "LedgerService":
        settings = settings or get_settings()
        return cls(
            session_factory=session_factory,
            max_attempts=settings.ledger.max_attempts,
            retry_backoff_seconds=settings.ledger.retry_backoff_seconds,
        )

    async def transfer(self, sender_id: str, recipient: str, amount: MoneyInput) -> TransferRecord:
        amount_cents = self._parse_amount(amount)
        logger.info("Initiating transfer from %s to %s for %d cents", sender_id, recipient, amount_cents)

        async def apply(session: AsyncSession) -> TransferRecord:
            return await self._apply(session, sender_id, recipient, amount_cents)

        try:
            record = await run_in_transaction(
                self.session_factory,
                apply,
                max_attempts=self.max_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                name="transfer",
            )
        except LedgerError as exc:
            logger.warning("Transfer from %s rejected: %s", sender_id, type(exc).__name__)
            raise

        logger.info("Transfer %s completed successfully", record.id)
        return record

    @staticmethod
    def _parse_amount(amount: MoneyInput) -> int:
        try:
            amount_cents = to_cents(amount)
        except MoneyFormatError as exc:
            raise InvalidAmountError(str(exc)) from exc
        if amount_cents <= 0:
            raise InvalidAmountError("Amount must be greater than zero.")
        if amount_cents > SQL_INTEGER_MAX:
            raise InvalidAmountError("Amount is too large.")
        return amount_cents

    async def _apply(
        self,
        session: AsyncSession,
        sender_id: str,
        recipient: str,
        amount_cents: int,
    ) -> TransferRecord:
        accounts, transfers = self.repositories(session)

        sender = await accounts.get_by_id(sender_id)
        if sender is None:
            raise SenderNotFoundError(sender_id)

        target = await AccountService(accounts).resolve(recipient)
        if target is None:
            raise RecipientNotFoundError(recipient)
        if target.id == sender.id:
            raise SelfTransferError("Cannot transfer funds to yourself.")

        locked = {account.id: account for account in await accounts.lock_for_update([sender.id, target.id])}
        if sender.id not in locked:
            raise SenderNotFoundError(sender_id)
        available = locked[sender.id].balance_cents
        if available < amount_cents:
            raise InsufficientFundsError(available, amount_cents)

        if await accounts.debit_if_sufficient(sender.id, amount_cents) is None:
            # Another transfer spent the funds between the read and the debit.
            raise InsufficientFundsError(available, amount_cents)
        if await accounts.credit(target.id, amount_cents) is None:
            raise RecipientNotFoundError(recipient)

        return await transfers.add_transfer(
            sender_id=sender.id,
            recipient_id=target.id,
            amount_cents=amount_cents,
        )
