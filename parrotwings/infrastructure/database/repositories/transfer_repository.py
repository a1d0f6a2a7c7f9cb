"""SQLAlchemy implementation of the transfer log (writes and history reads)."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import asc, case, desc, func, or_, select
from sqlalchemy.orm import aliased

from parrotwings.core.clock import as_utc, utcnow
from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.core.money import try_parse_cents
from parrotwings.db.models import Account as AccountModel, Transfer
from parrotwings.modules.common.repository import AsyncRepository
from parrotwings.modules.ledger.models import TransferRecord
from parrotwings.modules.transactions.models import AccountSummary, TransactionQuery, TransactionView


class SqlTransferRepository(AsyncRepository[Transfer]):
    async def add_transfer(self, *, sender_id: str, recipient_id: str, amount_cents: int) -> TransferRecord:
        model = await self.add(
            Transfer(
                sender_id=sender_id,
                recipient_id=recipient_id,
                amount_cents=amount_cents,
                created_at=utcnow(),
            )
        )
        return TransferRecord(
            id=model.id,
            sender_id=model.sender_id,
            recipient_id=model.recipient_id,
            amount_cents=model.amount_cents,
            created_at=as_utc(model.created_at),
        )

    async def search(self, account_id: str, query: TransactionQuery) -> tuple[Sequence[TransactionView], int]:
        sender = aliased(AccountModel, name="sender")
        recipient = aliased(AccountModel, name="recipient")

        def joined(*columns):
            # Explicit joins: the read model carries both parties' display fields.
            return (
                select(*columns)
                .select_from(Transfer)
                .join(sender, Transfer.sender_id == sender.id)
                .join(recipient, Transfer.recipient_id == recipient.id)
            )

        conditions = [or_(Transfer.sender_id == account_id, Transfer.recipient_id == account_id)]
        if query.filter:
            counterparty_email = case((Transfer.sender_id == account_id, recipient.email), else_=sender.email)
            matches = [counterparty_email.icontains(query.filter, autoescape=True)]
            amount_cents = try_parse_cents(query.filter)
            # Amounts outside the INTEGER range cannot match a stored transfer.
            if amount_cents is not None and 0 < amount_cents <= SQL_INTEGER_MAX:
                matches.append(Transfer.amount_cents == amount_cents)
            conditions.append(or_(*matches))

        count_stmt = joined(func.count(Transfer.id)).where(*conditions)
        total = await self.session.scalar(count_stmt)

        column = Transfer.amount_cents if query.sort_by == "amount" else Transfer.created_at
        direction = desc if query.sort_order == "desc" else asc
        page_stmt = (
            joined(Transfer, sender, recipient)
            .where(*conditions)
            .order_by(direction(column), direction(Transfer.id))
            .offset(query.start_index)
            .limit(query.count)
        )
        result = await self.session.execute(page_stmt)
        views = [
            self._to_view(account_id, transfer, sender_row, recipient_row)
            for transfer, sender_row, recipient_row in result.all()
        ]
        return views, int(total or 0)

    @staticmethod
    def _to_view(
        account_id: str,
        transfer: Transfer,
        sender: AccountModel,
        recipient: AccountModel,
    ) -> TransactionView:
        return TransactionView(
            id=transfer.id,
            created_at=as_utc(transfer.created_at),
            sender=AccountSummary(id=sender.id, email=sender.email, full_name=sender.full_name),
            recipient=AccountSummary(id=recipient.id, email=recipient.email, full_name=recipient.full_name),
            amount_cents=transfer.amount_cents,
            direction="outgoing" if transfer.sender_id == account_id else "incoming",
        )
