"""Mini README: Finance package for the mosque fund ledger.

Groups the transaction records read from the store with the pure folds that
turn them into balance figures: overall totals, per-cashier totals, and the
"my transactions" filter used by the cashier area.
"""

from .ledger import (
    AuthorTotals,
    LedgerSummary,
    Transaction,
    TransactionDraft,
    TransactionType,
    format_amount,
    my_transactions,
    per_author_breakdown,
    summarize,
)

__all__ = [
    "AuthorTotals",
    "LedgerSummary",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "format_amount",
    "my_transactions",
    "per_author_breakdown",
    "summarize",
]
