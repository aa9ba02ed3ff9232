"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


SORTABLE_FIELDS = frozenset({"name", "email", "role", "balance", "created_at"})
ROLES = ("user", "admin")


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(slots=True)
class Account:
    id: str
    name: str
    email: str
    role: str
    is_active: bool
    balance: int
    password_hash: str = field(repr=False)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(slots=True)
class AccountCreateInput:
    name: str
    email: str
    password: str
    role: str = "user"
    is_active: bool = True
