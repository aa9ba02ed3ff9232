"""Reusable FastAPI dependencies."""

from .account import get_account_repository, get_account_service
from .common import get_app_settings, get_clock
from .database import get_db_session, get_session_factory
from .transfer import get_transfer_service, get_unit_of_work_factory

__all__ = [
    "get_account_repository",
    "get_account_service",
    "get_app_settings",
    "get_clock",
    "get_db_session",
    "get_session_factory",
    "get_transfer_service",
    "get_unit_of_work_factory",
]
