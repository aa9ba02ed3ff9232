"""
Shared fixtures.

Provides:
- a temp-file SQLite database (aiosqlite) with tables created
- a FrozenClock so expiry can be driven explicitly
- seeded accounts, both in the database and in the in-memory store
- an admin account with bearer headers for the /users endpoints
- an httpx AsyncClient wired to the app with dependency overrides
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from loyalty.core.clock import FrozenClock
from loyalty.core.config import DatabaseSettings, SecuritySettings, Settings
from loyalty.core.crypto import hash_password
from loyalty.core.security import create_access_token
from loyalty.infrastructure.database.repositories import SqlAccountRepository
from loyalty.infrastructure.database.session import build_engine, build_session_factory, init_db
from loyalty.infrastructure.database.unit_of_work import SqlUnitOfWork
from loyalty.infrastructure.memory import InMemoryStore, InMemoryUnitOfWork
from loyalty.interfaces.http.deps import get_app_settings, get_clock, get_session_factory
from loyalty.main import create_app
from loyalty.modules.accounts import Account
from loyalty.modules.transfers import TransferService

START = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
PASSWORD = "password1"
# low bcrypt cost keeps fixture setup fast
PASSWORD_HASH = hash_password(PASSWORD, rounds=4)

SEED_ACCOUNTS = {
    "alice": ("Alice", "alice@acme.io"),
    "bob": ("Bob", "bob@acme.io"),
    "carol": ("Carol", "carol@acme.io"),
}


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(START)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'loyalty-test.db'}"),
        security=SecuritySettings(secret_key="test-secret-key"),
    )


@pytest.fixture
async def engine(settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def accounts(session_factory) -> dict[str, Account]:
    """alice, bob and carol persisted with 500 points each."""
    seeded = {}
    async with session_factory() as session:
        repository = SqlAccountRepository(session)
        for key, (name, email) in SEED_ACCOUNTS.items():
            seeded[key] = await repository.create_account(
                name=name,
                email=email,
                password_hash=PASSWORD_HASH,
                role="user",
                is_active=True,
                balance=500,
            )
        await session.commit()
    return seeded


@pytest.fixture
def sql_service(session_factory, clock) -> TransferService:
    return TransferService(lambda: SqlUnitOfWork(session_factory), clock=clock)


@pytest.fixture
def balance_of(session_factory):
    async def _balance(account_id: str) -> int | None:
        async with session_factory() as session:
            account = await SqlAccountRepository(session).get_by_id(account_id)
        return account.balance if account else None

    return _balance


@pytest.fixture
def store() -> InMemoryStore:
    store = InMemoryStore()
    for key, (name, email) in SEED_ACCOUNTS.items():
        store.add_account(
            Account(
                id=f"{key}-id",
                name=name,
                email=email,
                role="user",
                is_active=True,
                balance=500,
                password_hash=PASSWORD_HASH,
            )
        )
    return store


@pytest.fixture
def memory_service(store, clock) -> TransferService:
    return TransferService(lambda: InMemoryUnitOfWork(store), clock=clock)


@pytest.fixture
def app(settings, session_factory, clock):
    app = create_app(settings)
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_clock] = lambda: clock
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(accounts, settings):
    def _headers(key: str) -> dict[str, str]:
        token = create_access_token(accounts[key], settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def admin(session_factory, accounts) -> Account:
    async with session_factory() as session:
        account = await SqlAccountRepository(session).create_account(
            name="Root",
            email="root@acme.io",
            password_hash=PASSWORD_HASH,
            role="admin",
            is_active=True,
            balance=500,
        )
        await session.commit()
    return account


@pytest.fixture
def admin_headers(admin, settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(admin, settings)}"}
