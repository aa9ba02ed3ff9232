"""Base error type for domain failures."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_OPERATION = "invalid_operation"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    EXPIRED = "expired"
    UNAUTHORIZED = "unauthorized"


class DomainError(Exception):
    """Base class for errors raised by module services.

    Each subclass pins a ``kind`` which the HTTP layer translates to a
    status code; the message is passed through to the client unchanged.
    """

    kind: ErrorKind = ErrorKind.INVALID_OPERATION
    default_message: str = "Operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)
