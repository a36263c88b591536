"""Mini README: Abstract contract for the remote table store.

Structure:
    * FundStore - interface implemented by every storage backend.

The store owns every record. The client only reads snapshots and issues
explicit insert or delete requests. Backends translate their own failures
into ``UpstreamUnavailableError`` so callers handle one error type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from ..accounts.profiles import Profile, Role
from ..committee.directory import CommitteeMember, CommitteeMemberDraft
from ..finance.ledger import Transaction, TransactionDraft
from ..logging_utils import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..configuration import MosqueFundSettings

LOGGER = get_logger(__name__)


class FundStore(ABC):
    """Base interface for profile, transaction, and committee tables."""

    store_name: str = "generic"

    @classmethod
    def from_settings(cls, settings: MosqueFundSettings) -> "FundStore":
        """Instantiate the backend from runtime settings."""

        return cls()

    @abstractmethod
    def list_profiles(self, roles: Iterable[Role]) -> List[Profile]:
        """Return profiles whose role is one of ``roles``."""

    @abstractmethod
    def list_transactions(self, created_by: Optional[str] = None) -> List[Transaction]:
        """Return transactions newest first, optionally for one author."""

    @abstractmethod
    def insert_transaction(self, draft: TransactionDraft) -> Transaction:
        """Insert one transaction; the store assigns id and ``created_at``."""

    @abstractmethod
    def list_committee(self) -> List[CommitteeMember]:
        """Return committee members, newest first."""

    @abstractmethod
    def insert_committee_member(self, draft: CommitteeMemberDraft) -> CommitteeMember:
        """Insert one committee member."""

    @abstractmethod
    def delete_committee_member(self, member_id: Union[int, str]) -> None:
        """Remove a committee member, raising ``NotFoundError`` when absent."""
