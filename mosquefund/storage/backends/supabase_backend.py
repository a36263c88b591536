"""Mini README: Hosted-database store backed by the ``supabase`` client.

Structure:
    * SupabaseFundStore - reads and writes the ``profiles``, ``transactions``
      and ``committee`` tables through the PostgREST query builder.

Every request goes through ``_execute`` which converts client and network
failures into ``UpstreamUnavailableError``. Row-level restrictions, where
needed, are the database's job; this backend never filters for security.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from ..base import FundStore
from ..registry import REGISTRY
from ...accounts.profiles import Profile, Role
from ...committee.directory import CommitteeMember, CommitteeMemberDraft
from ...configuration import MosqueFundSettings
from ...errors import NotFoundError, UpstreamUnavailableError
from ...finance.ledger import Transaction, TransactionDraft
from ...logging_utils import get_logger

LOGGER = get_logger(__name__)

PROFILE_TABLE = "profiles"
TRANSACTION_TABLE = "transactions"
COMMITTEE_TABLE = "committee"


class SupabaseFundStore(FundStore):
    """Store implementation talking to a hosted Postgres via supabase."""

    store_name = "supabase"

    def __init__(self, client: Client) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: MosqueFundSettings) -> "SupabaseFundStore":
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError(
                "MOSQUEFUND_SUPABASE_URL and MOSQUEFUND_SUPABASE_KEY must be set "
                "to use the supabase store backend."
            )
        LOGGER.info("Connecting to supabase project at %s", settings.supabase_url)
        return cls(create_client(settings.supabase_url, settings.supabase_key))

    def _execute(self, query: Any, action: str) -> List[dict]:
        try:
            response = query.execute()
        except (APIError, httpx.HTTPError) as error:
            LOGGER.warning("Supabase request failed while trying to %s: %s", action, error)
            raise UpstreamUnavailableError(f"Could not {action}: {error}") from error
        return list(response.data or [])

    def list_profiles(self, roles: Iterable[Role]) -> List[Profile]:
        query = (
            self._client.table(PROFILE_TABLE)
            .select("id, name, role, pin")
            .in_("role", [role.value for role in roles])
        )
        rows = self._execute(query, "load profiles")
        return [Profile.from_record(row) for row in rows if Role.is_known(row.get("role"))]

    def list_transactions(self, created_by: Optional[str] = None) -> List[Transaction]:
        query = self._client.table(TRANSACTION_TABLE).select("*")
        if created_by is not None:
            query = query.eq("created_by", created_by)
        query = query.order("created_at", desc=True).order("id", desc=True)
        rows = self._execute(query, "load transactions")
        return [Transaction.from_record(row) for row in rows]

    def insert_transaction(self, draft: TransactionDraft) -> Transaction:
        query = self._client.table(TRANSACTION_TABLE).insert(draft.as_record())
        rows = self._execute(query, "add transaction")
        if not rows:
            raise UpstreamUnavailableError("Transaction insert returned no row")
        LOGGER.info("Inserted %s transaction %s", draft.transaction_type.value, rows[0].get("id"))
        return Transaction.from_record(rows[0])

    def list_committee(self) -> List[CommitteeMember]:
        query = self._client.table(COMMITTEE_TABLE).select("*").order("id", desc=True)
        rows = self._execute(query, "load committee")
        return [CommitteeMember.from_record(row) for row in rows]

    def insert_committee_member(self, draft: CommitteeMemberDraft) -> CommitteeMember:
        query = self._client.table(COMMITTEE_TABLE).insert(draft.as_record())
        rows = self._execute(query, "add committee member")
        if not rows:
            raise UpstreamUnavailableError("Committee insert returned no row")
        return CommitteeMember.from_record(rows[0])

    def delete_committee_member(self, member_id: Union[int, str]) -> None:
        query = self._client.table(COMMITTEE_TABLE).delete().eq("id", member_id)
        rows = self._execute(query, "remove committee member")
        if not rows:
            raise NotFoundError(f"Committee member {member_id} not found")
        LOGGER.info("Removed committee member %s", member_id)


REGISTRY.register(SupabaseFundStore)
