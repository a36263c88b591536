"""Mini README: Tests for the in-memory store backend.

These tests confirm ordering newest first, server-side assignment of ids
and timestamps, author filtering, committee management, and the simulated
outage switch.
"""

from __future__ import annotations

import sys
import threading
from datetime import datetime, timedelta, timezone

import pytest

from mosquefund.accounts import Role
from mosquefund.committee import CommitteeMemberDraft
from mosquefund.errors import NotFoundError, UpstreamUnavailableError
from mosquefund.finance import TransactionDraft, TransactionType
from mosquefund.storage.backends import InMemoryFundStore


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 7, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


def test_demo_seed_offers_admin_and_cashiers() -> None:
    store = InMemoryFundStore()

    profiles = store.list_profiles([Role.ADMIN, Role.CASHIER])

    assert {p.role for p in profiles} == {Role.ADMIN, Role.CASHIER}
    assert all(p.profile_id != "p-imam-01" for p in profiles)
    assert len(store.list_transactions()) == 3


def test_insert_assigns_increasing_ids_and_lists_newest_first() -> None:
    store = InMemoryFundStore(seed_demo=False, clock=_Clock())

    first = store.insert_transaction(TransactionDraft.create("credit", "100", created_by="c1"))
    second = store.insert_transaction(TransactionDraft.create("debit", "40", created_by="c2"))

    assert second.transaction_id > first.transaction_id
    assert second.created_at > first.created_at
    assert [t.transaction_id for t in store.list_transactions()] == [second.transaction_id, first.transaction_id]
    assert second.transaction_type is TransactionType.DEBIT


def test_list_transactions_filters_by_author() -> None:
    store = InMemoryFundStore(seed_demo=False, clock=_Clock())
    store.insert_transaction(TransactionDraft.create("credit", "5", created_by="c1"))
    store.insert_transaction(TransactionDraft.create("credit", "6", created_by="c2"))
    store.insert_transaction(TransactionDraft.create("debit", "1", created_by="c1"))

    mine = store.list_transactions(created_by="c1")

    assert [str(t.amount) for t in mine] == ["1", "5"]


def test_committee_insert_list_and_delete() -> None:
    store = InMemoryFundStore(seed_demo=False)
    first = store.insert_committee_member(CommitteeMemberDraft.create("Imran", "Secretary", " 0171 "))
    second = store.insert_committee_member(CommitteeMemberDraft.create("Nadia", "Treasurer"))

    assert [m.member_id for m in store.list_committee()] == [second.member_id, first.member_id]
    assert first.phone == "0171"

    store.delete_committee_member(str(first.member_id))
    assert [m.name for m in store.list_committee()] == ["Nadia"]
    with pytest.raises(NotFoundError):
        store.delete_committee_member(first.member_id)


def test_committee_draft_requires_name_and_position() -> None:
    with pytest.raises(ValueError):
        CommitteeMemberDraft.create("  ", "President")
    with pytest.raises(ValueError):
        CommitteeMemberDraft.create("Imran", "")


def test_unavailable_store_raises_upstream_error() -> None:
    store = InMemoryFundStore()
    store.available = False

    with pytest.raises(UpstreamUnavailableError):
        store.list_transactions()
    with pytest.raises(UpstreamUnavailableError):
        store.list_profiles([Role.ADMIN])


def test_concurrent_inserts_receive_unique_ids() -> None:
    """Worker threads inserting at once never share an id."""

    store = InMemoryFundStore(seed_demo=False)
    draft = TransactionDraft.create("credit", "1", created_by="c1")
    member = CommitteeMemberDraft.create("Imran", "Secretary")
    transaction_ids: list = []
    member_ids: list = []

    def insert_many() -> None:
        for _ in range(500):
            transaction_ids.append(store.insert_transaction(draft).transaction_id)
            member_ids.append(store.insert_committee_member(member).member_id)

    previous_interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        workers = [threading.Thread(target=insert_many) for _ in range(8)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()
    finally:
        sys.setswitchinterval(previous_interval)

    assert sorted(transaction_ids) == list(range(1, 4001))
    assert sorted(member_ids) == list(range(1, 4001))
    assert len(store.list_transactions()) == 4000
