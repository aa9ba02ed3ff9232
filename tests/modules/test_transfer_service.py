"""
Transfer workflow against the in-memory store.

Covers:
1. Create: pending record, expiry window, rejection rules
2. Confirm: balance movement, expiry, sender-only, idempotence
3. Rollback when a participant vanishes mid-confirmation
4. Reads: get_by_id access rules, paginated listing
5. Concurrent confirms
"""

import asyncio
from datetime import timedelta

import pytest

from loyalty.modules.accounts import AccountNotFoundError
from loyalty.modules.common import ErrorKind, PageRequest, SortSpec
from loyalty.modules.transfers import (
    SORTABLE_FIELDS,
    InsufficientPointsError,
    InvalidTransferOperationError,
    TransferAccessDeniedError,
    TransferExpiredError,
    TransferNotFoundError,
    TransferService,
    TransferStatus,
)
from loyalty.infrastructure.memory import InMemoryUnitOfWork

ALICE, BOB, CAROL = "alice-id", "bob-id", "carol-id"


def balances(store):
    return {account_id: account.balance for account_id, account in store.accounts.items()}


class TestCreateTransfer:
    async def test_create_produces_pending_transfer(self, memory_service, store, clock):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)

        assert transfer.status is TransferStatus.PENDING
        assert transfer.sender_id == ALICE
        assert transfer.receiver_id == BOB
        assert transfer.amount == 100
        assert transfer.created_at == clock.now()
        assert transfer.expires_at == transfer.created_at + timedelta(minutes=10)
        assert transfer.confirmed_at is None
        assert transfer.id in store.transfers

    async def test_create_does_not_touch_balances(self, memory_service, store):
        await memory_service.create(ALICE, "bob@acme.io", 100)

        assert balances(store) == {ALICE: 500, BOB: 500, CAROL: 500}

    async def test_receiver_email_is_case_insensitive(self, memory_service):
        transfer = await memory_service.create(ALICE, "  BOB@Acme.IO ", 5)

        assert transfer.receiver_id == BOB

    @pytest.mark.parametrize("amount", [1, 50, 500, 10_000])
    async def test_self_transfer_rejected_regardless_of_amount(self, memory_service, store, amount):
        with pytest.raises(InvalidTransferOperationError):
            await memory_service.create(ALICE, "alice@acme.io", amount)

        assert store.transfers == {}

    async def test_insufficient_points(self, memory_service, store):
        with pytest.raises(InsufficientPointsError) as excinfo:
            await memory_service.create(ALICE, "bob@acme.io", 1000)

        assert excinfo.value.kind is ErrorKind.INSUFFICIENT_FUNDS
        assert store.transfers == {}

    async def test_exact_balance_is_allowed(self, memory_service):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 500)

        assert transfer.amount == 500

    async def test_unknown_receiver(self, memory_service, store):
        with pytest.raises(AccountNotFoundError) as excinfo:
            await memory_service.create(ALICE, "nobody@acme.io", 10)

        assert excinfo.value.kind is ErrorKind.NOT_FOUND
        assert store.transfers == {}

    async def test_unknown_sender(self, memory_service):
        with pytest.raises(AccountNotFoundError):
            await memory_service.create("ghost-id", "bob@acme.io", 10)

    @pytest.mark.parametrize("amount", [0, -5])
    async def test_non_positive_amount(self, memory_service, amount):
        with pytest.raises(InvalidTransferOperationError):
            await memory_service.create(ALICE, "bob@acme.io", amount)

    async def test_custom_window(self, store, clock):
        service = TransferService(
            lambda: InMemoryUnitOfWork(store),
            clock=clock,
            confirm_window=timedelta(minutes=3),
        )

        transfer = await service.create(ALICE, "bob@acme.io", 10)

        assert transfer.expires_at - transfer.created_at == timedelta(minutes=3)


class TestConfirmTransfer:
    async def test_confirm_moves_points(self, memory_service, store):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)

        confirmed = await memory_service.confirm(transfer.id, ALICE)

        assert confirmed.status is TransferStatus.CONFIRMED
        assert confirmed.confirmed_at is not None
        assert balances(store) == {ALICE: 400, BOB: 600, CAROL: 500}
        assert store.transfers[transfer.id].is_confirmed

    async def test_confirm_twice_applies_once(self, memory_service, store):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)
        await memory_service.confirm(transfer.id, ALICE)

        with pytest.raises(InvalidTransferOperationError):
            await memory_service.confirm(transfer.id, ALICE)

        assert balances(store) == {ALICE: 400, BOB: 600, CAROL: 500}

    async def test_missing_and_confirmed_look_the_same(self, memory_service):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)
        await memory_service.confirm(transfer.id, ALICE)

        with pytest.raises(InvalidTransferOperationError) as missing:
            await memory_service.confirm("does-not-exist", ALICE)
        with pytest.raises(InvalidTransferOperationError) as confirmed:
            await memory_service.confirm(transfer.id, ALICE)

        assert str(missing.value) == str(confirmed.value)

    async def test_expired_transfer_stays_pending(self, memory_service, store, clock):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)
        clock.advance(timedelta(minutes=11))

        with pytest.raises(TransferExpiredError):
            await memory_service.confirm(transfer.id, ALICE)

        assert store.transfers[transfer.id].status is TransferStatus.PENDING
        assert balances(store) == {ALICE: 500, BOB: 500, CAROL: 500}

    async def test_confirm_at_exact_expiry_is_allowed(self, memory_service, clock):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)
        clock.set(transfer.expires_at)

        confirmed = await memory_service.confirm(transfer.id, ALICE)

        assert confirmed.is_confirmed

    @pytest.mark.parametrize("actor", [BOB, CAROL])
    async def test_only_sender_may_confirm(self, memory_service, store, actor):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)

        with pytest.raises(TransferAccessDeniedError) as excinfo:
            await memory_service.confirm(transfer.id, actor)

        assert excinfo.value.kind is ErrorKind.UNAUTHORIZED
        assert store.transfers[transfer.id].is_pending
        assert balances(store) == {ALICE: 500, BOB: 500, CAROL: 500}

    async def test_balance_may_go_negative_by_default(self, memory_service, store):
        first = await memory_service.create(ALICE, "bob@acme.io", 400)
        second = await memory_service.create(ALICE, "carol@acme.io", 400)

        await memory_service.confirm(first.id, ALICE)
        await memory_service.confirm(second.id, ALICE)

        assert balances(store) == {ALICE: -300, BOB: 900, CAROL: 900}

    async def test_recheck_refuses_to_overdraw(self, store, clock):
        service = TransferService(
            lambda: InMemoryUnitOfWork(store),
            clock=clock,
            recheck_balance_on_confirm=True,
        )
        first = await service.create(ALICE, "bob@acme.io", 400)
        second = await service.create(ALICE, "carol@acme.io", 400)
        await service.confirm(first.id, ALICE)

        with pytest.raises(InsufficientPointsError):
            await service.confirm(second.id, ALICE)

        assert store.transfers[second.id].is_pending
        assert balances(store) == {ALICE: 100, BOB: 900, CAROL: 500}


class TestConfirmRollback:
    async def test_missing_receiver_rolls_back_everything(self, memory_service, store):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)
        del store.accounts[BOB]

        with pytest.raises(AccountNotFoundError):
            await memory_service.confirm(transfer.id, ALICE)

        assert store.accounts[ALICE].balance == 500
        assert store.transfers[transfer.id].is_pending

    async def test_missing_sender_rolls_back_status(self, memory_service, store):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)
        del store.accounts[ALICE]

        with pytest.raises(AccountNotFoundError):
            await memory_service.confirm(transfer.id, ALICE)

        assert store.transfers[transfer.id].is_pending
        assert store.accounts[BOB].balance == 500


class TestReadTransfers:
    async def test_get_by_participants(self, memory_service):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)

        assert (await memory_service.get_by_id(transfer.id, ALICE)).id == transfer.id
        assert (await memory_service.get_by_id(transfer.id, BOB)).id == transfer.id

    async def test_get_by_outsider_denied(self, memory_service):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)

        with pytest.raises(TransferAccessDeniedError):
            await memory_service.get_by_id(transfer.id, CAROL)

    async def test_get_missing(self, memory_service):
        with pytest.raises(TransferNotFoundError):
            await memory_service.get_by_id("missing", ALICE)

    async def test_list_includes_sent_and_received(self, memory_service, clock):
        sent = await memory_service.create(ALICE, "bob@acme.io", 10)
        clock.advance(timedelta(seconds=1))
        received = await memory_service.create(CAROL, "alice@acme.io", 20)
        clock.advance(timedelta(seconds=1))
        await memory_service.create(BOB, "carol@acme.io", 30)

        page = await memory_service.list_for_account(ALICE)

        assert [t.id for t in page.items] == [sent.id, received.id]
        assert page.total_items == 2
        assert page.total_pages == 1
        assert page.current_page == 1

    async def test_list_paginates_and_sorts(self, memory_service, clock):
        created = []
        for amount in (5, 50, 15, 25, 35):
            created.append(await memory_service.create(ALICE, "bob@acme.io", amount))
            clock.advance(timedelta(seconds=1))

        first = await memory_service.list_for_account(ALICE, PageRequest(page=1, limit=2))
        last = await memory_service.list_for_account(ALICE, PageRequest(page=3, limit=2))
        by_amount = await memory_service.list_for_account(
            BOB,
            PageRequest(page=1, limit=5, sort=SortSpec.parse("amount:desc", SORTABLE_FIELDS)),
        )

        assert [t.id for t in first.items] == [created[0].id, created[1].id]
        assert first.total_pages == 3
        assert [t.id for t in last.items] == [created[4].id]
        assert [t.amount for t in by_amount.items] == [50, 35, 25, 15, 5]

    async def test_list_empty(self, memory_service):
        page = await memory_service.list_for_account(CAROL)

        assert page.items == []
        assert page.total_items == 0
        assert page.total_pages == 0


class TestConcurrentConfirm:
    async def test_parallel_confirms_of_same_transfer(self, memory_service, store):
        transfer = await memory_service.create(ALICE, "bob@acme.io", 100)

        results = await asyncio.gather(
            *(memory_service.confirm(transfer.id, ALICE) for _ in range(10)),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert all(isinstance(f, InvalidTransferOperationError) for f in failures)
        assert balances(store) == {ALICE: 400, BOB: 600, CAROL: 500}

    async def test_parallel_confirms_sharing_accounts_conserve_points(self, memory_service, store):
        transfers = [await memory_service.create(ALICE, "bob@acme.io", 10) for _ in range(5)]
        transfers += [await memory_service.create(BOB, "alice@acme.io", 7) for _ in range(5)]

        await asyncio.gather(*(memory_service.confirm(t.id, t.sender_id) for t in transfers))

        assert balances(store) == {ALICE: 500 - 50 + 35, BOB: 500 + 50 - 35, CAROL: 500}
        assert sum(balances(store).values()) == 1500
