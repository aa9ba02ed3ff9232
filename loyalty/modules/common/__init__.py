"""Shared building blocks for feature modules."""

from .errors import DomainError, ErrorKind
from .pagination import Page, PageRequest, SortSpec

__all__ = [
    "DomainError",
    "ErrorKind",
    "Page",
    "PageRequest",
    "SortSpec",
]
