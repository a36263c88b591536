"""Mini README: FastAPI service exposing the mosque fund screens.

Structure:
    * create_application - application factory wiring store, session, and views.
    * Exception handlers - map domain failures onto HTTP status codes.

Public routes cover sign-in, the fund balance, the history, and the
committee directory. Routes under ``/admin`` and ``/cashier`` go through
the same ``check_access`` rule; a denied request gets a 403 with an
``access_denied`` body and changes nothing.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import JSONResponse

from .views import BalanceView, CommitteeView, HistoryView, MyTransactionsView, ReportsView
from ..accounts.authorization import check_access
from ..accounts.persistence import SessionStore
from ..accounts.profiles import Role
from ..accounts.session import SessionManager
from ..committee.directory import CommitteeMemberDraft
from ..configuration import MosqueFundSettings, get_settings
from ..errors import (
    DataIntegrityError,
    InvalidCredentialsError,
    NotFoundError,
    UpstreamUnavailableError,
)
from ..finance.ledger import TransactionDraft
from ..logging_utils import get_logger
from ..storage import REGISTRY, FundStore

LOGGER = get_logger(__name__)


def _view_response(body: dict) -> JSONResponse:
    status = 403 if body.get("state") == "access_denied" else 200
    return JSONResponse(body, status_code=status)


def create_application(
    store: Optional[FundStore] = None,
    session_manager: Optional[SessionManager] = None,
    settings: Optional[MosqueFundSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    if session_manager is None:
        store = store or REGISTRY.create(settings.store_backend, settings)
        persistence = (
            SessionStore(settings.session_file, settings.session_storage_key)
            if settings.persist_session
            else None
        )
        session_manager = SessionManager(store, persistence)
    sessions = session_manager
    store = sessions.store

    view_options = {"precision": settings.display_precision, "currency": settings.currency_label}
    balance_view = BalanceView(sessions, **view_options)
    history_view = HistoryView(sessions, **view_options)
    committee_view = CommitteeView(sessions, **view_options)
    reports_view = ReportsView(sessions, **view_options)
    my_transactions_view = MyTransactionsView(sessions, **view_options)
    views = [balance_view, history_view, committee_view, reports_view, my_transactions_view]

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        for view in views:
            view.close()
        LOGGER.debug("Closed %s views", len(views))

    app = FastAPI(title="Mosque Fund Desk", version="0.1.0", lifespan=lifespan)
    LOGGER.info("Application created with '%s' store", store.store_name)

    @app.exception_handler(NotFoundError)
    async def _not_found(_: Request, error: NotFoundError) -> JSONResponse:
        return JSONResponse({"detail": str(error)}, status_code=404)

    @app.exception_handler(InvalidCredentialsError)
    async def _bad_pin(_: Request, error: InvalidCredentialsError) -> JSONResponse:
        # The client clears the entered PIN and lets the user retry.
        return JSONResponse({"detail": str(error), "pin": ""}, status_code=401)

    @app.exception_handler(DataIntegrityError)
    async def _bad_data(_: Request, error: DataIntegrityError) -> JSONResponse:
        return JSONResponse({"detail": str(error)}, status_code=422)

    @app.exception_handler(UpstreamUnavailableError)
    async def _upstream(_: Request, error: UpstreamUnavailableError) -> JSONResponse:
        return JSONResponse({"detail": str(error)}, status_code=503)

    @app.exception_handler(ValueError)
    async def _invalid_input(_: Request, error: ValueError) -> JSONResponse:
        return JSONResponse({"detail": str(error)}, status_code=400)

    def _denied(role: Role) -> Optional[JSONResponse]:
        decision = check_access(sessions.current_session(), role)
        if decision.allowed:
            return None
        return JSONResponse(decision.as_dict(), status_code=403)

    @app.get("/profiles")
    async def profiles() -> JSONResponse:
        """List sign-in candidates; a failed load returns an empty list and the error."""

        candidates = await asyncio.to_thread(sessions.list_candidates)
        return JSONResponse(
            {
                "profiles": [
                    {"id": p.profile_id, "name": p.name, "role": p.role.value}
                    for p in candidates.profiles
                ],
                "error": str(candidates.error) if candidates.error else None,
            }
        )

    @app.post("/login")
    async def login(profile_id: str = Form(...), pin: str = Form("")) -> JSONResponse:
        role = await asyncio.to_thread(sessions.authenticate, profile_id, pin)
        session = sessions.current_session()
        return JSONResponse(
            {"role": role.value, "landing": role.landing_path, "session": session.as_dict()}
        )

    @app.post("/logout")
    async def logout() -> JSONResponse:
        await asyncio.to_thread(sessions.sign_out)
        return JSONResponse({"session": None})

    @app.get("/session")
    async def current_session() -> JSONResponse:
        session = sessions.current_session()
        return JSONResponse({"session": session.as_dict() if session else None})

    @app.get("/balance")
    async def balance() -> JSONResponse:
        return _view_response(await balance_view.refresh())

    @app.get("/transactions")
    async def transactions() -> JSONResponse:
        return _view_response(await history_view.refresh())

    @app.get("/committee")
    async def committee() -> JSONResponse:
        return _view_response(await committee_view.refresh())

    @app.get("/admin/reports")
    async def admin_reports() -> JSONResponse:
        return _view_response(await reports_view.refresh())

    @app.post("/admin/transactions")
    async def admin_add_transaction(
        transaction_type: str = Form(..., alias="type"),
        amount: str = Form(...),
        description: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Admin ledger entry; the description is optional here."""

        denied = _denied(Role.ADMIN)
        if denied:
            return denied
        draft = TransactionDraft.create(
            transaction_type, amount, description, created_by=sessions.current_session().profile_id
        )
        created = await asyncio.to_thread(store.insert_transaction, draft)
        return JSONResponse(created.as_dict(settings.display_precision), status_code=201)

    @app.post("/admin/committee")
    async def admin_add_member(
        name: str = Form(...),
        position: str = Form(...),
        phone: Optional[str] = Form(None),
        photo_url: Optional[str] = Form(None),
    ) -> JSONResponse:
        denied = _denied(Role.ADMIN)
        if denied:
            return denied
        draft = CommitteeMemberDraft.create(name, position, phone, photo_url)
        member = await asyncio.to_thread(store.insert_committee_member, draft)
        return JSONResponse(member.as_dict(), status_code=201)

    @app.delete("/admin/committee/{member_id}")
    async def admin_remove_member(member_id: str) -> JSONResponse:
        denied = _denied(Role.ADMIN)
        if denied:
            return denied
        await asyncio.to_thread(store.delete_committee_member, member_id)
        return JSONResponse({"removed": member_id})

    @app.get("/cashier/transactions")
    async def cashier_transactions() -> JSONResponse:
        return _view_response(await my_transactions_view.refresh())

    @app.post("/cashier/transactions")
    async def cashier_add_transaction(
        transaction_type: str = Form("credit", alias="type"),
        amount: str = Form(...),
        description: str = Form(""),
    ) -> JSONResponse:
        """Cashier ledger entry; amount must be positive and a description given."""

        denied = _denied(Role.CASHIER)
        if denied:
            return denied
        draft = TransactionDraft.create(
            transaction_type,
            amount,
            description,
            created_by=sessions.current_session().profile_id,
            require_description=True,
        )
        created = await asyncio.to_thread(store.insert_transaction, draft)
        LOGGER.info("Cashier %s recorded transaction %s", draft.created_by, created.transaction_id)
        return JSONResponse(created.as_dict(settings.display_precision), status_code=201)

    return app
