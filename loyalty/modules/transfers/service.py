"""Transfer workflow: create a pending transfer, confirm it once, read it back."""

from __future__ import annotations

import logging
from datetime import timedelta

from loyalty.core.clock import Clock, SystemClock
from loyalty.modules.accounts.exceptions import AccountNotFoundError
from loyalty.modules.accounts.models import normalize_email
from loyalty.modules.common.errors import DomainError
from loyalty.modules.common.pagination import Page, PageRequest

from . import policy
from .exceptions import (
    InsufficientPointsError,
    InvalidTransferOperationError,
    TransferExpiredError,
    TransferNotFoundError,
)
from .models import Transfer
from .repository import TransferUnitOfWork, UnitOfWorkFactory

logger = logging.getLogger(__name__)

DEFAULT_CONFIRM_WINDOW = timedelta(minutes=10)


class TransferService:
    """Two-phase point transfers between accounts.

    ``create`` only records intent: balances are untouched and the sender's
    funds are checked at that instant, not held. ``confirm`` applies the
    balance change, together with the status change, inside a single unit
    of work. Expired transfers are never swept; they simply fail to confirm.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        clock: Clock | None = None,
        confirm_window: timedelta = DEFAULT_CONFIRM_WINDOW,
        recheck_balance_on_confirm: bool = False,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock or SystemClock()
        self._confirm_window = confirm_window
        self._recheck_balance_on_confirm = recheck_balance_on_confirm

    @property
    def confirm_window(self) -> timedelta:
        return self._confirm_window

    async def create(self, sender_id: str, receiver_email: str, amount: int) -> Transfer:
        if amount < 1:
            raise InvalidTransferOperationError("Amount must be a positive integer")

        async with self._uow_factory() as uow:
            sender = await uow.accounts.get_by_id(sender_id)
            if sender is None:
                raise AccountNotFoundError("Sender not found")

            if normalize_email(receiver_email) == normalize_email(sender.email):
                raise InvalidTransferOperationError("Cannot transfer to yourself")

            if sender.balance < amount:
                raise InsufficientPointsError()

            receiver = await uow.accounts.get_by_email(normalize_email(receiver_email))
            if receiver is None:
                raise AccountNotFoundError("Receiver not found")
            if receiver.id == sender.id:
                raise InvalidTransferOperationError("Cannot transfer to yourself")

            created_at = self._clock.now()
            transfer = await uow.transfers.create(
                sender_id=sender.id,
                receiver_id=receiver.id,
                amount=amount,
                created_at=created_at,
                expires_at=created_at + self._confirm_window,
            )

        logger.info(
            "Transfer %s created: %s -> %s, %s points, expires %s",
            transfer.id,
            transfer.sender_id,
            transfer.receiver_id,
            transfer.amount,
            transfer.expires_at.isoformat(),
        )
        return transfer

    async def confirm(self, transfer_id: str, acting_id: str) -> Transfer:
        try:
            async with self._uow_factory() as uow:
                transfer = await uow.transfers.get(transfer_id, for_update=True)
                if transfer is None or transfer.is_confirmed:
                    raise InvalidTransferOperationError()

                now = self._clock.now()
                if transfer.is_expired(now):
                    raise TransferExpiredError()

                policy.ensure_can_confirm(transfer, acting_id)

                confirmed = await uow.transfers.mark_confirmed(transfer.id, now)
                if confirmed is None:
                    # another confirm won the race
                    raise InvalidTransferOperationError()

                await self._debit_sender(uow, confirmed)

                receiver = await uow.accounts.adjust_balance(confirmed.receiver_id, confirmed.amount)
                if receiver is None:
                    raise AccountNotFoundError("Receiver not found")
        except DomainError as exc:
            logger.warning("Confirm of transfer %s by %s rejected: %s", transfer_id, acting_id, exc)
            raise

        logger.info(
            "Transfer %s confirmed: %s points moved %s -> %s",
            confirmed.id,
            confirmed.amount,
            confirmed.sender_id,
            confirmed.receiver_id,
        )
        return confirmed

    async def _debit_sender(self, uow: TransferUnitOfWork, transfer: Transfer) -> None:
        min_balance = 0 if self._recheck_balance_on_confirm else None
        sender = await uow.accounts.adjust_balance(
            transfer.sender_id,
            -transfer.amount,
            min_balance=min_balance,
        )
        if sender is not None:
            return
        if min_balance is not None and await uow.accounts.get_by_id(transfer.sender_id) is not None:
            raise InsufficientPointsError()
        raise AccountNotFoundError("Sender not found")

    async def get_by_id(self, transfer_id: str, acting_id: str) -> Transfer:
        async with self._uow_factory() as uow:
            transfer = await uow.transfers.get(transfer_id)
        if transfer is None:
            raise TransferNotFoundError()
        policy.ensure_can_view(transfer, acting_id)
        return transfer

    async def list_for_account(self, account_id: str, request: PageRequest | None = None) -> Page[Transfer]:
        request = request or PageRequest()
        async with self._uow_factory() as uow:
            total = await uow.transfers.count_for_account(account_id)
            items = await uow.transfers.list_for_account(account_id, request) if total else []
        return Page(
            items=list(items),
            total_items=total,
            current_page=request.page,
            page_size=request.limit,
        )


__all__ = ["TransferService", "DEFAULT_CONFIRM_WINDOW"]
