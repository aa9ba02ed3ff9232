"""
Seed demo accounts (one admin) for local development.
"""
import asyncio

from loyalty.core.config import get_settings
from loyalty.infrastructure.database.session import get_session, init_db
from loyalty.modules.accounts import AccountCreateInput, AccountService

DEMO_ACCOUNTS = [
    AccountCreateInput(name="Alice Demo", email="alice@loyalty.dev", password="password1"),
    AccountCreateInput(name="Bob Demo", email="bob@loyalty.dev", password="password1"),
    AccountCreateInput(name="Admin", email="admin@loyalty.dev", password="admin1234", role="admin"),
]


async def create_demo_accounts():
    await init_db()
    settings = get_settings()

    async for db in get_session():
        service = AccountService.with_session(db, default_balance=settings.accounts.default_balance)
        for payload in DEMO_ACCOUNTS:
            if await service.get_by_email(payload.email):
                print(f"Account already exists: {payload.email}")
                continue
            account = await service.register(payload)
            print(f"Created {account.email} / {payload.password} with {account.balance} points")


if __name__ == "__main__":
    asyncio.run(create_demo_accounts())
