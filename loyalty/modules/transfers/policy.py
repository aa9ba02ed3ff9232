"""Who may see and confirm a transfer."""

from __future__ import annotations

from .exceptions import TransferAccessDeniedError
from .models import Transfer


def can_view(transfer: Transfer, account_id: str) -> bool:
    return transfer.involves(account_id)


def can_confirm(transfer: Transfer, account_id: str) -> bool:
    # receivers cannot accept incoming transfers on the sender's behalf
    return transfer.sender_id == account_id


def ensure_can_view(transfer: Transfer, account_id: str) -> None:
    if not can_view(transfer, account_id):
        raise TransferAccessDeniedError("You do not have permission to view this transfer")


def ensure_can_confirm(transfer: Transfer, account_id: str) -> None:
    if not can_confirm(transfer, account_id):
        raise TransferAccessDeniedError("You are not the sender")


__all__ = ["can_view", "can_confirm", "ensure_can_view", "ensure_can_confirm"]
