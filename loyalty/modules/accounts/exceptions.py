"""Account domain specific exceptions."""

from loyalty.modules.common.errors import DomainError, ErrorKind


class AccountError(DomainError):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when registering an email that is already taken."""

    kind = ErrorKind.CONFLICT
    default_message = "Email already taken"


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Account not found"
