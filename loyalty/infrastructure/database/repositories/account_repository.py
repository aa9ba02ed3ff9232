"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.db.models import Account as AccountModel
from loyalty.modules.accounts.exceptions import AccountAlreadyExistsError
from loyalty.modules.accounts.models import Account
from loyalty.modules.common.pagination import PageRequest

SORT_COLUMNS = {
    "name": AccountModel.name,
    "email": AccountModel.email,
    "role": AccountModel.role,
    "balance": AccountModel.balance,
    "created_at": AccountModel.created_at,
}


class SqlAccountRepository:
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        model = await self._session.get(AccountModel, account_id, populate_existing=True)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.email == email)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_accounts(self, request: PageRequest) -> Sequence[Account]:
        column = SORT_COLUMNS[request.sort.field]
        order = column.desc() if request.sort.descending else column.asc()
        stmt = (
            select(AccountModel)
            .order_by(order, AccountModel.id.asc())
            .offset(request.offset)
            .limit(request.limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_accounts(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(AccountModel))
        return int(result.scalar_one())

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
        model = AccountModel(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            is_active=is_active,
            balance=balance,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # a concurrent registration took the email after our lookup
            raise AccountAlreadyExistsError() from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def adjust_balance(
        self,
        account_id: str,
        delta: int,
        *,
        min_balance: int | None = None,
    ) -> Account | None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(balance=AccountModel.balance + delta)
            .returning(AccountModel.id)
        )
        if min_balance is not None:
            stmt = stmt.where(AccountModel.balance + delta >= min_balance)
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none() is None:
            return None
        return await self.get_by_id(account_id)

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            name=model.name,
            email=model.email,
            role=model.role or "user",
            is_active=bool(model.is_active),
            balance=int(model.balance),
            password_hash=model.password_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
