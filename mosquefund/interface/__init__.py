"""Mini README: HTTP interface package for the mosque fund service.

Exports the application factory used by the launcher script and ASGI
servers, together with the view classes the routes render.
"""

from .views import BalanceView, CommitteeView, HistoryView, LedgerView, MyTransactionsView, ReportsView
from .web_app import create_application

__all__ = [
    "BalanceView",
    "CommitteeView",
    "HistoryView",
    "LedgerView",
    "MyTransactionsView",
    "ReportsView",
    "create_application",
]
