"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .transfer_repository import SqlTransferRepository

__all__ = [
    "SqlAccountRepository",
    "SqlTransferRepository",
]
