"""Domain services for account management."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.crypto import hash_password, verify_password
from loyalty.modules.common.pagination import Page, PageRequest

from .exceptions import AccountAlreadyExistsError
from .models import Account, AccountCreateInput, normalize_email
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Registration, login and lookups. Balances are owned by the transfer workflow."""

    def __init__(self, repository: AccountRepository, *, default_balance: int = 500) -> None:
        self._repository = repository
        self._default_balance = default_balance

    @classmethod
    def with_session(cls, session: AsyncSession, *, default_balance: int = 500) -> "AccountService":
        # deferred: the repository module imports this package
        from loyalty.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session), default_balance=default_balance)

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def list_accounts(self, request: PageRequest | None = None) -> Page[Account]:
        request = request or PageRequest()
        total = await self._repository.count_accounts()
        items = await self._repository.list_accounts(request) if total else []
        return Page(items=list(items), total_items=total, current_page=request.page, page_size=request.limit)

    async def authenticate(self, email: str, password: str) -> Account | None:
        account = await self.get_by_email(email)
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def register(self, payload: AccountCreateInput) -> Account:
        email = normalize_email(payload.email)
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError()

        account = await self._repository.create_account(
            name=payload.name.strip(),
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role,
            is_active=payload.is_active,
            balance=self._default_balance,
        )
        logger.info("Registered account %s with %s points", account.id, account.balance)
        return account
