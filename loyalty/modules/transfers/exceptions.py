"""Transfer workflow errors."""

from loyalty.modules.common.errors import DomainError, ErrorKind


class TransferError(DomainError):
    """Base class for transfer workflow errors."""


class TransferNotFoundError(TransferError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Transfer not found"


class InvalidTransferOperationError(TransferError):
    """Self-transfers, and confirming a missing or already confirmed transfer."""

    kind = ErrorKind.INVALID_OPERATION
    default_message = "Invalid or already confirmed transfer"


class InsufficientPointsError(TransferError):
    kind = ErrorKind.INSUFFICIENT_FUNDS
    default_message = "Insufficient points"


class TransferExpiredError(TransferError):
    kind = ErrorKind.EXPIRED
    default_message = "Transfer has expired"


class TransferAccessDeniedError(TransferError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "You do not have permission to access this transfer"
