"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol, Sequence

from loyalty.modules.common.pagination import PageRequest

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        ...

    async def list_accounts(self, request: PageRequest) -> Sequence[Account]:
        ...

    async def count_accounts(self) -> int:
        ...

    async def create_account(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: str,
        is_active: bool,
        balance: int,
    ) -> Account:
        ...

    async def adjust_balance(
        self,
        account_id: str,
        delta: int,
        *,
        min_balance: int | None = None,
    ) -> Account | None:
        """Atomically add ``delta`` to the balance.

        When ``min_balance`` is given the change only applies if the new
        balance stays at or above it. Returns ``None`` when nothing changed.
        """
        ...
