"""Mini README: In-process store used for demos, local runs, and tests.

Structure:
    * InMemoryFundStore - keeps raw table rows in lists and converts them on read.

Rows are kept in the same shape the hosted tables return so that record
conversion is exercised exactly as in production. Routes call the store from
worker threads, so id assignment and row changes happen under a lock. The
store seeds deterministic demo data unless explicit rows are supplied.
Setting ``available`` to ``False`` simulates an outage.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..base import FundStore
from ..registry import REGISTRY
from ...accounts.profiles import Profile, Role
from ...committee.directory import CommitteeMember, CommitteeMemberDraft, newest_first
from ...errors import NotFoundError, UpstreamUnavailableError
from ...finance.ledger import Transaction, TransactionDraft
from ...logging_utils import get_logger

LOGGER = get_logger(__name__)

Row = Dict[str, Any]

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryFundStore(FundStore):
    """Store rows in memory with monotonically assigned identifiers."""

    store_name = "memory"

    def __init__(
        self,
        profiles: Optional[Iterable[Row]] = None,
        transactions: Optional[Iterable[Row]] = None,
        committee: Optional[Iterable[Row]] = None,
        *,
        seed_demo: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._profiles: List[Row] = [dict(row) for row in profiles or []]
        self._transactions: List[Row] = [dict(row) for row in transactions or []]
        self._committee: List[Row] = [dict(row) for row in committee or []]
        self._clock = clock
        self._lock = threading.Lock()
        self.available = True
        if seed_demo and not (self._profiles or self._transactions or self._committee):
            self._seed_demo_rows()
        self._transaction_sequence = max((int(row["id"]) for row in self._transactions if row.get("id") is not None), default=0)
        self._committee_sequence = max((int(row["id"]) for row in self._committee if row.get("id") is not None), default=0)
        LOGGER.debug(
            "Memory store initialised with %s profiles, %s transactions, %s committee members",
            len(self._profiles),
            len(self._transactions),
            len(self._committee),
        )

    def _seed_demo_rows(self) -> None:
        """Populate the tables with deterministic demo data."""

        self._profiles = [
            {"id": "p-admin-01", "name": "Abdul Karim", "role": "admin", "pin": "1234"},
            {"id": "p-cash-01", "name": "Rahim Uddin", "role": "cashier", "pin": "1111"},
            {"id": "p-cash-02", "name": "Salma Begum", "role": "cashier", "pin": "2222"},
            {"id": "p-imam-01", "name": "Imam Yusuf", "role": "imam", "pin": None},
        ]
        self._transactions = [
            {
                "id": 1,
                "type": "credit",
                "amount": "5000.00",
                "description": "Friday collection",
                "created_by": "p-cash-01",
                "created_at": "2024-05-03T13:30:00+00:00",
            },
            {
                "id": 2,
                "type": "debit",
                "amount": "1200.00",
                "description": "Electricity bill",
                "created_by": "p-cash-01",
                "created_at": "2024-05-06T09:15:00+00:00",
            },
            {
                "id": 3,
                "type": "credit",
                "amount": "2500.50",
                "description": "Ramadan donation",
                "created_by": "p-cash-02",
                "created_at": "2024-05-10T18:45:00+00:00",
            },
        ]
        self._committee = [
            {"id": 1, "name": "Abdul Karim", "position": "President", "phone": "01700000001", "photo_url": None},
            {"id": 2, "name": "Jamal Hossain", "position": "Treasurer", "phone": None, "photo_url": None},
        ]

    def _ensure_available(self) -> None:
        if not self.available:
            raise UpstreamUnavailableError("Memory store is marked unavailable")

    def list_profiles(self, roles: Iterable[Role]) -> List[Profile]:
        self._ensure_available()
        wanted = {role.value for role in roles}
        return [
            Profile.from_record(row)
            for row in self._profiles
            if str(row.get("role", "")).strip().lower() in wanted
        ]

    def list_transactions(self, created_by: Optional[str] = None) -> List[Transaction]:
        self._ensure_available()
        with self._lock:
            rows = list(self._transactions)
        if created_by is not None:
            rows = [row for row in rows if row.get("created_by") == created_by]
        transactions = [Transaction.from_record(row) for row in rows]
        return sorted(
            transactions,
            key=lambda transaction: (transaction.created_at or _EPOCH, transaction.transaction_id),
            reverse=True,
        )

    def insert_transaction(self, draft: TransactionDraft) -> Transaction:
        self._ensure_available()
        row = dict(draft.as_record())
        with self._lock:
            self._transaction_sequence += 1
            row["id"] = self._transaction_sequence
            row["created_at"] = self._clock().isoformat()
            self._transactions.append(row)
        LOGGER.info("Inserted %s transaction %s", draft.transaction_type.value, row["id"])
        return Transaction.from_record(row)

    def list_committee(self) -> List[CommitteeMember]:
        self._ensure_available()
        return newest_first(CommitteeMember.from_record(row) for row in self._committee)

    def insert_committee_member(self, draft: CommitteeMemberDraft) -> CommitteeMember:
        self._ensure_available()
        row = dict(draft.as_record())
        with self._lock:
            self._committee_sequence += 1
            row["id"] = self._committee_sequence
            self._committee.append(row)
        LOGGER.info("Added committee member %s", row["id"])
        return CommitteeMember.from_record(row)

    def delete_committee_member(self, member_id: Union[int, str]) -> None:
        self._ensure_available()
        with self._lock:
            for index, row in enumerate(self._committee):
                if str(row.get("id")) == str(member_id):
                    del self._committee[index]
                    LOGGER.info("Removed committee member %s", member_id)
                    return
        raise NotFoundError(f"Committee member {member_id} not found")


REGISTRY.register(InMemoryFundStore)
