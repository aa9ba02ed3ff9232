"""Account related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.config import Settings
from loyalty.infrastructure.database.repositories.account_repository import SqlAccountRepository
from loyalty.modules.accounts.service import AccountService

from .common import get_app_settings
from .database import get_db_session


def get_account_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_account_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(repository, default_balance=settings.accounts.default_balance)


__all__ = [
    "get_account_repository",
    "get_account_service",
]
