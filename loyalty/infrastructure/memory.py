"""In-memory account/transfer store for running the workflow without a database."""

from __future__ import annotations

import asyncio
import copy
import uuid
from datetime import datetime, timezone
from types import TracebackType
from typing import Sequence

from loyalty.modules.accounts.models import Account
from loyalty.modules.common.pagination import PageRequest
from loyalty.modules.transfers.models import Transfer, TransferStatus


class InMemoryStore:
    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.transfers: dict[str, Transfer] = {}
        self.lock = asyncio.Lock()

    def add_account(self, account: Account) -> Account:
        self.accounts[account.id] = account
        return account

    def snapshot(self) -> tuple[dict[str, Account], dict[str, Transfer]]:
        return copy.deepcopy(self.accounts), dict(self.transfers)

    def restore(self, snapshot: tuple[dict[str, Account], dict[str, Transfer]]) -> None:
        self.accounts, self.transfers = snapshot


class InMemoryAccountRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, account_id: str) -> Account | None:
        account = self._store.accounts.get(account_id)
        return copy.copy(account) if account else None

    async def get_by_email(self, email: str) -> Account | None:
        for account in self._store.accounts.values():
            if account.email == email:
                return copy.copy(account)
        return None

    async def list_accounts(self, request: PageRequest) -> Sequence[Account]:
        rows = sorted(self._store.accounts.values(), key=lambda a: a.id)
        rows.sort(key=lambda a: self._sort_value(a, request.sort.field), reverse=request.sort.descending)
        return [copy.copy(a) for a in rows[request.offset:request.offset + request.limit]]

    async def count_accounts(self) -> int:
        return len(self._store.accounts)

    @staticmethod
    def _sort_value(account: Account, field: str):
        value = getattr(account, field)
        # accounts seeded without timestamps sort last
        return (value is None, value)

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
        account = Account(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            role=role,
            is_active=is_active,
            balance=balance,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self._store.add_account(account)
        return copy.copy(account)

    async def adjust_balance(
        self,
        account_id: str,
        delta: int,
        *,
        min_balance: int | None = None,
    ) -> Account | None:
        account = self._store.accounts.get(account_id)
        if account is None:
            return None
        if min_balance is not None and account.balance + delta < min_balance:
            return None
        account.balance += delta
        return copy.copy(account)


class InMemoryTransferRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create(
        self,
        *,
        sender_id: str,
        receiver_id: str,
        amount: int,
        created_at: datetime,
        expires_at: datetime,
    ) -> Transfer:
        transfer = Transfer(
            id=str(uuid.uuid4()),
            sender_id=sender_id,
            receiver_id=receiver_id,
            amount=amount,
            status=TransferStatus.PENDING,
            created_at=created_at,
            expires_at=expires_at,
        )
        self._store.transfers[transfer.id] = transfer
        return transfer

    async def get(self, transfer_id: str, *, for_update: bool = False) -> Transfer | None:
        return self._store.transfers.get(transfer_id)

    async def mark_confirmed(self, transfer_id: str, confirmed_at: datetime) -> Transfer | None:
        transfer = self._store.transfers.get(transfer_id)
        if transfer is None or not transfer.is_pending:
            return None
        confirmed = transfer.confirm(confirmed_at)
        self._store.transfers[transfer_id] = confirmed
        return confirmed

    async def list_for_account(self, account_id: str, request: PageRequest) -> Sequence[Transfer]:
        rows = sorted(
            (t for t in self._store.transfers.values() if t.involves(account_id)),
            key=lambda t: t.id,
        )
        rows.sort(key=lambda t: self._sort_value(t, request.sort.field), reverse=request.sort.descending)
        return rows[request.offset:request.offset + request.limit]

    async def count_for_account(self, account_id: str) -> int:
        return sum(1 for t in self._store.transfers.values() if t.involves(account_id))

    @staticmethod
    def _sort_value(transfer: Transfer, field: str):
        value = getattr(transfer, field)
        return value.value if isinstance(value, TransferStatus) else value


class InMemoryUnitOfWork:
    """Serialises units on the store lock and restores a snapshot on failure."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._snapshot: tuple[dict[str, Account], dict[str, Transfer]] | None = None
        self.accounts = InMemoryAccountRepository(store)
        self.transfers = InMemoryTransferRepository(store)

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        await self._store.lock.acquire()
        self._snapshot = self._store.snapshot()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None and self._snapshot is not None:
                self._store.restore(self._snapshot)
        finally:
            self._snapshot = None
            self._store.lock.release()


__all__ = [
    "InMemoryStore",
    "InMemoryAccountRepository",
    "InMemoryTransferRepository",
    "InMemoryUnitOfWork",
]
