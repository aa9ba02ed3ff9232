"""Transfer workflow dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from loyalty.core.clock import Clock
from loyalty.core.config import Settings
from loyalty.infrastructure.database.unit_of_work import SqlUnitOfWork
from loyalty.modules.transfers.repository import UnitOfWorkFactory
from loyalty.modules.transfers.service import TransferService

from .common import get_app_settings, get_clock
from .database import get_session_factory


def get_unit_of_work_factory(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> UnitOfWorkFactory:
    return lambda: SqlUnitOfWork(factory)


def get_transfer_service(
    uow_factory: UnitOfWorkFactory = Depends(get_unit_of_work_factory),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_app_settings),
) -> TransferService:
    return TransferService(
        uow_factory,
        clock=clock,
        confirm_window=settings.confirm_window,
        recheck_balance_on_confirm=settings.transfers.recheck_balance_on_confirm,
    )


__all__ = [
    "get_unit_of_work_factory",
    "get_transfer_service",
]
