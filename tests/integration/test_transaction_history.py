"""Transaction history queries"""

from decimal import Decimal

import pytest
import pytest_asyncio

from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.modules.ledger import LedgerService
from parrotwings.modules.transactions import TransactionQuery, TransactionQueryService


@pytest_asyncio.fixture
async def history(ledger: LedgerService, create_account):
    """alice sends to bob and carol, bob pays alice back, carol pays bob."""
    alice = await create_account("alice@example.com", "Alice Parrot")
    bob = await create_account("bob@example.com", "Bob Wings")
    carol = await create_account("carol@example.com", "Carol Feather")

    await ledger.transfer(alice.id, bob.id, "10.00")
    await ledger.transfer(alice.id, carol.id, "20.50")
    await ledger.transfer(bob.id, alice.id, "5.00")
    await ledger.transfer(carol.id, bob.id, "7.00")
    return {"alice": alice, "bob": bob, "carol": carol}


async def list_for(session_factory, account_id: str, **kwargs):
    async with session_factory() as session:
        service = TransactionQueryService.with_session(session)
        return await service.list_transactions(account_id, TransactionQuery(**kwargs))


class TestHistoryListing:
    @pytest.mark.asyncio
    async def test_only_own_transfers(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id)

        assert page.total_count == 3
        assert [item.amount for item in page.items] == [Decimal("10.00"), Decimal("20.50"), Decimal("5.00")]

    @pytest.mark.asyncio
    async def test_direction_and_parties(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id)
        first, _, last = page.items

        assert first.direction == "outgoing"
        assert first.recipient.email == "bob@example.com"
        assert first.recipient.full_name == "Bob Wings"
        assert last.direction == "incoming"
        assert last.sender.id == history["bob"].id

    @pytest.mark.asyncio
    async def test_account_without_transfers(self, session_factory, create_account, history) -> None:
        dave = await create_account("dave@example.com")

        page = await list_for(session_factory, dave.id)

        assert page.items == []
        assert page.total_count == 0


class TestHistorySorting:
    @pytest.mark.asyncio
    async def test_amount_descending(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, sort_by="amount", sort_order="desc")

        assert [item.amount_cents for item in page.items] == [2050, 1000, 500]

    @pytest.mark.asyncio
    async def test_date_descending(self, session_factory, history) -> None:
        ascending = await list_for(session_factory, history["bob"].id)
        descending = await list_for(session_factory, history["bob"].id, sort_order="desc")

        assert [item.id for item in descending.items] == [item.id for item in reversed(ascending.items)]


class TestHistoryPagination:
    @pytest.mark.asyncio
    async def test_pages_are_disjoint_and_complete(self, session_factory, history) -> None:
        account_id = history["alice"].id
        first = await list_for(session_factory, account_id, start_index=0, count=2)
        second = await list_for(session_factory, account_id, start_index=2, count=2)
        everything = await list_for(session_factory, account_id, count=100)

        first_ids = {item.id for item in first.items}
        second_ids = {item.id for item in second.items}
        assert len(first.items) == 2
        assert len(second.items) == 1
        assert first_ids.isdisjoint(second_ids)
        assert first_ids | second_ids == {item.id for item in everything.items}
        assert first.total_count == second.total_count == 3

    @pytest.mark.asyncio
    async def test_largest_start_index(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, start_index=SQL_INTEGER_MAX)

        assert page.items == []
        assert page.total_count == 3

    def test_start_index_beyond_integer_range(self) -> None:
        with pytest.raises(ValueError, match="start_index"):
            TransactionQuery(start_index=10**20)

    @pytest.mark.asyncio
    async def test_start_beyond_end(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, start_index=50)

        assert page.items == []
        assert page.total_count == 3


class TestHistoryFilter:
    @pytest.mark.asyncio
    async def test_counterparty_email(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, filter="BOB")

        assert page.total_count == 2
        assert {item.amount_cents for item in page.items} == {1000, 500}

    @pytest.mark.asyncio
    async def test_own_email_does_not_match(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, filter="alice")

        assert page.total_count == 0

    @pytest.mark.asyncio
    async def test_exact_amount(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, filter="20.5")

        assert page.total_count == 1
        assert page.items[0].recipient.email == "carol@example.com"

    @pytest.mark.asyncio
    async def test_like_wildcards_are_literal(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, filter="%")

        assert page.total_count == 0

    @pytest.mark.asyncio
    async def test_amount_beyond_integer_range_matches_nothing(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, filter="100000000000000000")

        assert page.items == []
        assert page.total_count == 0

    @pytest.mark.asyncio
    async def test_negative_amount_is_matched_as_text_only(self, session_factory, history) -> None:
        page = await list_for(session_factory, history["alice"].id, filter="-10")

        assert page.total_count == 0
