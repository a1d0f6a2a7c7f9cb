"""
Seed demo accounts for local development.

Every account starts with the configured starting balance.
"""
import asyncio
import logging

from parrotwings.core.config import get_settings
from parrotwings.core.log_config import configure_logging
from parrotwings.infrastructure.database.session import dispose_engine, get_session, init_db
from parrotwings.modules.accounts import AccountCreateInput, AccountService

logger = logging.getLogger("parrotwings.init_accounts")

DEMO_ACCOUNTS = (
    ("alice@parrotwings.local", "Alice Parrot", "pass123"),
    ("bob@parrotwings.local", "Bob Wings", "pass123"),
    ("carol@parrotwings.local", "Carol Feather", "pass123"),
)


async def create_demo_accounts() -> None:
    configure_logging(get_settings())
    await init_db()

    async for db in get_session():
        service = AccountService.with_session(db)
        for email, full_name, password in DEMO_ACCOUNTS:
            if await service.get_by_email(email):
                logger.info("Account %s already exists", email)
                continue
            account = await service.register(
                AccountCreateInput(email=email, password=password, full_name=full_name)
            )
            logger.info("Created %s / %s with balance %s", account.email, password, account.balance)

    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(create_demo_accounts())
