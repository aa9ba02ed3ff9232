"""Domain models for point transfers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

SORTABLE_FIELDS = frozenset({"created_at", "expires_at", "amount", "status"})


class TransferStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"

    def can_transition_to(self, target: "TransferStatus") -> bool:
        return self is TransferStatus.PENDING and target is TransferStatus.CONFIRMED


@dataclass(frozen=True, slots=True)
class Transfer:
    id: str
    sender_id: str
    receiver_id: str
    amount: int
    status: TransferStatus
    created_at: datetime
    expires_at: datetime
    confirmed_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status is TransferStatus.PENDING

    @property
    def is_confirmed(self) -> bool:
        return self.status is TransferStatus.CONFIRMED

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def involves(self, account_id: str) -> bool:
        return account_id in (self.sender_id, self.receiver_id)

    def confirm(self, at: datetime) -> "Transfer":
        """Return the confirmed copy of this transfer; only a pending transfer may be confirmed."""
        if not self.status.can_transition_to(TransferStatus.CONFIRMED):
            raise ValueError(f"transfer {self.id} is already {self.status.value}")
        return replace(self, status=TransferStatus.CONFIRMED, confirmed_at=at)
