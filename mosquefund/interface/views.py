"""Mini README: Display surfaces backing the HTTP routes.

Structure:
    * LedgerView - base class: access check, guarded refresh, rendering.
    * BalanceView / HistoryView - public fund totals and history.
    * ReportsView - admin-only totals plus per-cashier breakdown.
    * MyTransactionsView - cashier-only list of their own entries.
    * CommitteeView - public committee directory.

Each view receives the ``SessionManager`` explicitly. ``refresh`` checks
access before anything else; a denied view returns an ``access_denied``
state and neither fetches nor changes what it holds. A failed fetch leaves
the view with empty collections and a reported error; the user retries by
refreshing again.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..accounts.authorization import AccessDecision, check_access
from ..accounts.profiles import Role
from ..accounts.session import Session, SessionManager
from ..errors import UpstreamUnavailableError
from ..finance.ledger import format_amount, my_transactions, per_author_breakdown, summarize
from ..logging_utils import get_logger
from ..storage.base import FundStore
from ..utils.fetch_guard import LatestFetchGuard

LOGGER = get_logger(__name__)

Payload = Dict[str, Any]


class LedgerView(ABC):
    """Common behaviour for every protected or public display surface."""

    name: str = "view"
    required_role: Optional[Role] = None

    def __init__(
        self,
        sessions: SessionManager,
        *,
        precision: int = 2,
        currency: str = "BDT",
    ) -> None:
        self._sessions = sessions
        self.precision = precision
        self.currency = currency
        self._payload: Optional[Payload] = None
        self._owner: Optional[str] = None
        self._error: Optional[str] = None
        self._guard: LatestFetchGuard[tuple] = LatestFetchGuard(self._apply, label=self.name)

    @property
    def store(self) -> FundStore:
        return self._sessions.store

    def access(self) -> AccessDecision:
        return check_access(self._sessions.current_session(), self.required_role)

    async def refresh(self) -> Dict[str, Any]:
        """Reload data if access is allowed, then render.

        Only the newest fetch is kept on the view. A request whose fetch was
        overtaken by a newer one still answers with what it loaded itself.
        """

        decision = self.access()
        if not decision.allowed:
            LOGGER.debug("Access denied for %s view", self.name)
            return decision.as_dict()
        session = self._sessions.current_session()
        owner = session.profile_id if session else None
        results: List[tuple] = []
        failures: List[Exception] = []

        async def load() -> tuple:
            try:
                result = await self._fetch(session, owner)
            except Exception as error:
                failures.append(error)
                raise
            results.append(result)
            return result

        if await self._guard.run(load):
            return self.render()
        if failures:
            raise failures[0]
        if results:
            return self._render_state(results[0])
        return self.render()

    async def _fetch(self, session: Optional[Session], owner: Optional[str]) -> tuple:
        try:
            payload = await asyncio.to_thread(self._load, session)
        except UpstreamUnavailableError as error:
            LOGGER.warning("%s view could not load: %s", self.name, error)
            return owner, self._empty(), str(error)
        return owner, payload, None

    def _apply(self, result: tuple) -> None:
        self._owner, self._payload, self._error = result

    def render(self) -> Dict[str, Any]:
        """Present the current state without touching the store."""

        return self._render_state((self._owner, self._payload, self._error))

    def _render_state(self, state: tuple) -> Dict[str, Any]:
        decision = self.access()
        if not decision.allowed:
            return decision.as_dict()
        session = self._sessions.current_session()
        owner = session.profile_id if session else None
        state_owner, payload, error = state
        loaded = payload is not None and state_owner == owner
        body: Dict[str, Any] = {"state": "ok", "view": self.name, "error": error if loaded else None}
        body.update(self._present(payload if loaded else self._empty()))
        return body

    def close(self) -> None:
        """Tear the view down; pending loads will no longer apply."""

        self._guard.close()

    def _amount(self, value) -> str:
        return format_amount(value, self.precision, self.currency)

    @abstractmethod
    def _load(self, session: Optional[Session]) -> Payload:
        """Fetch and fold data; runs off the event loop."""

    @abstractmethod
    def _empty(self) -> Payload:
        """Payload shown before the first load or after a failure."""

    @abstractmethod
    def _present(self, payload: Payload) -> Dict[str, Any]:
        """Turn a payload into serialisable output."""


class HistoryView(LedgerView):
    """All transactions, newest first, with overall totals."""

    name = "history"

    def _load(self, session: Optional[Session]) -> Payload:
        transactions = self.store.list_transactions()
        return {"transactions": transactions, "summary": summarize(transactions)}

    def _empty(self) -> Payload:
        return {"transactions": [], "summary": summarize([])}

    def _present(self, payload: Payload) -> Dict[str, Any]:
        return {
            "summary": payload["summary"].as_dict(self.precision),
            "transactions": [item.as_dict(self.precision) for item in payload["transactions"]],
        }


class BalanceView(HistoryView):
    """Headline fund balance shown on the home screen."""

    name = "balance"

    def _present(self, payload: Payload) -> Dict[str, Any]:
        summary = payload["summary"]
        return {
            "summary": summary.as_dict(self.precision),
            "balance": self._amount(summary.net_balance),
        }


class ReportsView(LedgerView):
    """Admin report: overall totals and totals per active cashier."""

    name = "reports"
    required_role = Role.ADMIN

    def _load(self, session: Optional[Session]) -> Payload:
        transactions = self.store.list_transactions()
        cashiers = self.store.list_profiles([Role.CASHIER])
        return {
            "summary": summarize(transactions),
            "cashiers": per_author_breakdown(transactions, cashiers),
        }

    def _empty(self) -> Payload:
        return {"summary": summarize([]), "cashiers": []}

    def _present(self, payload: Payload) -> Dict[str, Any]:
        summary = payload["summary"]
        return {
            "summary": summary.as_dict(self.precision),
            "balance": self._amount(summary.net_balance),
            "positive": summary.net_balance >= 0,
            "cashiers": [entry.as_dict(self.precision) for entry in payload["cashiers"]],
        }


class MyTransactionsView(LedgerView):
    """Cashier's own entries and their totals."""

    name = "my-transactions"
    required_role = Role.CASHIER

    def _load(self, session: Optional[Session]) -> Payload:
        author_id = session.profile_id
        transactions = my_transactions(self.store.list_transactions(created_by=author_id), author_id)
        return {"transactions": transactions, "summary": summarize(transactions)}

    def _empty(self) -> Payload:
        return {"transactions": [], "summary": summarize([])}

    def _present(self, payload: Payload) -> Dict[str, Any]:
        return {
            "summary": payload["summary"].as_dict(self.precision),
            "transactions": [item.as_dict(self.precision) for item in payload["transactions"]],
        }


class CommitteeView(LedgerView):
    """Public committee directory."""

    name = "committee"

    def _load(self, session: Optional[Session]) -> Payload:
        return {"members": self.store.list_committee()}

    def _empty(self) -> Payload:
        return {"members": []}

    def _present(self, payload: Payload) -> Dict[str, Any]:
        return {"members": [member.as_dict() for member in payload["members"]]}
