"""Repository and unit-of-work protocols for the transfer workflow."""

from __future__ import annotations

from datetime import datetime
from types import TracebackType
from typing import Callable, Protocol, Sequence

from loyalty.modules.accounts.repository import AccountRepository
from loyalty.modules.common.pagination import PageRequest

from .models import Transfer


class TransferRepository(Protocol):
    async def create(
        self,
        *,
        sender_id: str,
        receiver_id: str,
        amount: int,
        created_at: datetime,
        expires_at: datetime,
    ) -> Transfer:
        ...

    async def get(self, transfer_id: str, *, for_update: bool = False) -> Transfer | None:
        ...

    async def mark_confirmed(self, transfer_id: str, confirmed_at: datetime) -> Transfer | None:
        """Flip a pending transfer to confirmed; ``None`` if it is missing or no longer pending."""
        ...

    async def list_for_account(self, account_id: str, request: PageRequest) -> Sequence[Transfer]:
        ...

    async def count_for_account(self, account_id: str) -> int:
        ...


class TransferUnitOfWork(Protocol):
    """Repositories bound to one transaction.

    Leaving the context cleanly commits; leaving it with an exception rolls
    back every write made through ``accounts`` and ``transfers``.
    """

    accounts: AccountRepository
    transfers: TransferRepository

    async def __aenter__(self) -> "TransferUnitOfWork":
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        ...


UnitOfWorkFactory = Callable[[], TransferUnitOfWork]
