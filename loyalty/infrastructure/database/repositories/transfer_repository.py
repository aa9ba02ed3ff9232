"""SQLAlchemy implementation of the transfer repository."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.clock import as_utc
from loyalty.db.models import Transfer as TransferModel
from loyalty.modules.common.pagination import PageRequest
from loyalty.modules.transfers.models import Transfer, TransferStatus

SORT_COLUMNS = {
    "created_at": TransferModel.created_at,
    "expires_at": TransferModel.expires_at,
    "amount": TransferModel.amount,
    "status": TransferModel.status,
}


class SqlTransferRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        sender_id: str,
        receiver_id: str,
        amount: int,
        created_at: datetime,
        expires_at: datetime,
    ) -> Transfer:
        model = TransferModel(
            sender_id=sender_id,
            receiver_id=receiver_id,
            amount=amount,
            status=TransferStatus.PENDING.value,
            created_at=created_at,
            expires_at=expires_at,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def get(self, transfer_id: str, *, for_update: bool = False) -> Transfer | None:
        stmt = select(TransferModel).where(TransferModel.id == transfer_id)
        if for_update:
            stmt = stmt.with_for_update()
        stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def mark_confirmed(self, transfer_id: str, confirmed_at: datetime) -> Transfer | None:
        stmt = (
            update(TransferModel)
            .where(
                TransferModel.id == transfer_id,
                TransferModel.status == TransferStatus.PENDING.value,
            )
            .values(status=TransferStatus.CONFIRMED.value, confirmed_at=confirmed_at)
            .returning(TransferModel.id)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            return None
        return await self.get(transfer_id)

    async def list_for_account(self, account_id: str, request: PageRequest) -> Sequence[Transfer]:
        column = SORT_COLUMNS[request.sort.field]
        order = column.desc() if request.sort.descending else column.asc()
        stmt = (
            select(TransferModel)
            .where(self._involves(account_id))
            .order_by(order, TransferModel.id.asc())
            .offset(request.offset)
            .limit(request.limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_for_account(self, account_id: str) -> int:
        stmt = select(func.count()).select_from(TransferModel).where(self._involves(account_id))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    def _involves(account_id: str):
        return or_(TransferModel.sender_id == account_id, TransferModel.receiver_id == account_id)

    @staticmethod
    def _to_domain(model: TransferModel) -> Transfer:
        return Transfer(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            amount=model.amount,
            status=TransferStatus(model.status),
            created_at=as_utc(model.created_at),
            expires_at=as_utc(model.expires_at),
            confirmed_at=as_utc(model.confirmed_at) if model.confirmed_at else None,
        )
