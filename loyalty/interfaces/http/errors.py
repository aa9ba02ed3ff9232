"""Translate domain errors into HTTP responses."""

from fastapi import HTTPException, status

from loyalty.modules.common.errors import DomainError, ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_OPERATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
}


def to_http_exception(exc: DomainError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        detail=exc.message,
    )


__all__ = ["STATUS_BY_KIND", "to_http_exception"]
