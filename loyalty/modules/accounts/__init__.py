"""Account domain exports"""

from .exceptions import AccountAlreadyExistsError, AccountError, AccountNotFoundError
from .models import ROLES, SORTABLE_FIELDS, Account, AccountCreateInput, normalize_email
from .service import AccountService

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountService",
    "ROLES",
    "SORTABLE_FIELDS",
    "normalize_email",
]
