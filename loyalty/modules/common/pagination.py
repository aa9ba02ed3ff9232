"""Pagination and sort helpers shared by list endpoints."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Collection, Generic, Sequence, TypeVar

T = TypeVar("T")

SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: str
    descending: bool = False

    @classmethod
    def parse(cls, raw: str, allowed: Collection[str]) -> "SortSpec":
        """Parse ``field:direction``; the direction defaults to ascending."""
        name, _, direction = raw.strip().partition(":")
        name = name.strip()
        direction = (direction.strip() or "asc").lower()
        if name not in allowed:
            raise ValueError(f"Cannot sort by '{name}'; expected one of {sorted(allowed)}")
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got '{direction}'")
        return cls(field=name, descending=direction == "desc")

    def __str__(self) -> str:
        return f"{self.field}:{'desc' if self.descending else 'asc'}"


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = 1
    limit: int = 10
    sort: SortSpec = field(default_factory=lambda: SortSpec("created_at"))

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be a positive integer")
        if self.limit < 1:
            raise ValueError("limit must be a positive integer")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True)
class Page(Generic[T]):
    items: Sequence[T]
    total_items: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size) if self.page_size else 0
