"""Account registration, lookup and listing"""

from decimal import Decimal

import pytest

from parrotwings.modules.accounts import (
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountListQuery,
    AccountNotFoundError,
    AccountService,
    InvalidEmailError,
)


async def register(session_factory, email: str, full_name: str = "Polly Parrot", password: str = "cracker1"):
    async with session_factory() as session:
        account = await AccountService.with_session(session).register(
            AccountCreateInput(email=email, password=password, full_name=full_name)
        )
        await session.commit()
        return account


class TestRegister:
    @pytest.mark.asyncio
    async def test_starting_balance_and_normalized_email(self, session_factory) -> None:
        account = await register(session_factory, "  Polly@Example.COM ")

        assert account.email == "polly@example.com"
        assert account.balance == Decimal("500.00")
        assert account.password_hash != "cracker1"

    @pytest.mark.asyncio
    async def test_duplicate_email_any_case(self, session_factory) -> None:
        await register(session_factory, "polly@example.com")

        with pytest.raises(AccountAlreadyExistsError):
            await register(session_factory, "POLLY@example.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["polly", "polly@", "@example.com", "po lly@example.com"])
    async def test_invalid_email(self, session_factory, email: str) -> None:
        with pytest.raises(InvalidEmailError):
            await register(session_factory, email)

    @pytest.mark.asyncio
    async def test_custom_starting_balance(self, session_factory) -> None:
        from parrotwings.infrastructure.database.repositories import SqlAccountRepository

        async with session_factory() as session:
            service = AccountService(SqlAccountRepository(session), starting_balance="12.34")
            account = await service.register(
                AccountCreateInput(email="rich@example.com", password="cracker1", full_name="Rich")
            )

        assert account.balance_cents == 1234


class TestLookup:
    @pytest.mark.asyncio
    async def test_authenticate(self, session_factory) -> None:
        await register(session_factory, "polly@example.com", password="cracker1")

        async with session_factory() as session:
            service = AccountService.with_session(session)
            assert await service.authenticate("POLLY@example.com", "cracker1") is not None
            assert await service.authenticate("polly@example.com", "wrong") is None
            assert await service.authenticate("nobody@example.com", "cracker1") is None

    @pytest.mark.asyncio
    async def test_resolve_and_balance(self, session_factory) -> None:
        polly = await register(session_factory, "polly@example.com")

        async with session_factory() as session:
            service = AccountService.with_session(session)
            assert (await service.resolve(polly.id)).email == "polly@example.com"
            assert (await service.resolve("Polly@Example.com")).id == polly.id
            assert await service.get_balance(polly.id) == 50000
            with pytest.raises(AccountNotFoundError):
                await service.get_balance("ghost")


class TestListAccounts:
    @pytest.mark.asyncio
    async def test_filters_sorting_and_paging(self, session_factory, create_account) -> None:
        await create_account("zed@example.com", "Zed Zebra")
        await create_account("amy@example.com", "Amy Zebra")
        await create_account("bob@sample.org", "Bob Budgie")

        async with session_factory() as session:
            service = AccountService.with_session(session)

            page = await service.list_accounts(AccountListQuery(email_filter="EXAMPLE"))
            assert page.total == 2
            assert [account.email for account in page.accounts] == ["amy@example.com", "zed@example.com"]

            page = await service.list_accounts(
                AccountListQuery(full_name_filter="zebra", sort_by="full_name", sort_order="desc")
            )
            assert [account.full_name for account in page.accounts] == ["Zed Zebra", "Amy Zebra"]

            page = await service.list_accounts(AccountListQuery(start_index=1, count=1))
            assert page.total == 3
            assert [account.email for account in page.accounts] == ["bob@sample.org"]
