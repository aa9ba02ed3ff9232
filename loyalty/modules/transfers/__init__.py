"""Transfer domain exports"""

from .exceptions import (
    InsufficientPointsError,
    InvalidTransferOperationError,
    TransferAccessDeniedError,
    TransferError,
    TransferExpiredError,
    TransferNotFoundError,
)
from .models import SORTABLE_FIELDS, Transfer, TransferStatus
from .service import TransferService

__all__ = [
    "InsufficientPointsError",
    "InvalidTransferOperationError",
    "SORTABLE_FIELDS",
    "Transfer",
    "TransferAccessDeniedError",
    "TransferError",
    "TransferExpiredError",
    "TransferNotFoundError",
    "TransferService",
    "TransferStatus",
]
