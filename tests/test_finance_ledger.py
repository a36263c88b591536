"""Mini README: Tests covering the ledger folds and record conversion.

Structure:
    * summarize - totals, empty input, order independence, bad records.
    * per_author_breakdown - only active authors, stable order.
    * my_transactions - author filter keeps relative order.
    * TransactionDraft - input validation for new entries.
"""

from __future__ import annotations

import itertools
from decimal import Decimal

import pytest

from mosquefund.accounts import Profile, Role
from mosquefund.errors import DataIntegrityError
from mosquefund.finance import (
    Transaction,
    TransactionDraft,
    TransactionType,
    format_amount,
    my_transactions,
    per_author_breakdown,
    summarize,
)


def _txn(transaction_id: int, kind, amount, created_by=None) -> Transaction:
    return Transaction.from_record(
        {"id": transaction_id, "type": kind, "amount": amount, "created_by": created_by}
    )


def test_summarize_example_totals() -> None:
    """Two credits and a debit fold into the expected figures."""

    summary = summarize([_txn(1, "credit", 100), _txn(2, "debit", 30), _txn(3, "credit", 20)])

    assert summary.credit_total == Decimal("120")
    assert summary.debit_total == Decimal("30")
    assert summary.net_balance == Decimal("90")
    assert summary.count == 3


def test_summarize_empty_is_all_zero() -> None:
    summary = summarize([])

    assert (summary.credit_total, summary.debit_total, summary.net_balance, summary.count) == (0, 0, 0, 0)
    assert summary.as_dict() == {
        "credit_total": "0.00",
        "debit_total": "0.00",
        "net_balance": "0.00",
        "count": 0,
    }


def test_summarize_is_order_independent_and_exact() -> None:
    """Every permutation gives identical totals with no float drift."""

    records = [
        _txn(1, "credit", 0.1),
        _txn(2, "credit", "0.2"),
        _txn(3, "debit", 0.3),
        _txn(4, "credit", "1999.99"),
        _txn(5, "debit", 0.01),
    ]
    results = {summarize(order) for order in itertools.permutations(records)}

    assert len(results) == 1
    (summary,) = results
    assert summary.credit_total == Decimal("2000.29")
    assert summary.net_balance == Decimal("1999.98")


def test_summarize_stays_exact_beyond_default_decimal_precision() -> None:
    """A large credit beside small ones gives the same total in any order."""

    records = [_txn(1, "credit", "1e27"), _txn(2, "credit", "0.6"), _txn(3, "credit", "0.6")]
    results = {summarize(order) for order in itertools.permutations(records)}

    assert len(results) == 1
    (summary,) = results
    assert summary.credit_total == Decimal("1000000000000000000000000001.2")
    assert summary.as_dict()["net_balance"] == "1000000000000000000000000001.20"


def test_summarize_refuses_to_round_oversized_totals() -> None:
    with pytest.raises(DataIntegrityError):
        summarize([_txn(1, "credit", "1e70"), _txn(2, "credit", "1")])


def test_summarize_skips_unknown_types_but_counts_them() -> None:
    """Legacy or unknown types contribute to neither total."""

    summary = summarize([_txn(1, "credit", 50), _txn(2, "income", 70), _txn(3, "debit", 5)])

    assert summary.credit_total == Decimal("50")
    assert summary.debit_total == Decimal("5")
    assert summary.count == 3


@pytest.mark.parametrize("amount", [None, "NaN", float("nan"), "Infinity", -5])
def test_summarize_rejects_bad_amounts(amount) -> None:
    with pytest.raises(DataIntegrityError):
        summarize([_txn(1, "credit", 10), _txn(2, "debit", amount)])


def test_non_numeric_amount_rejected_on_read() -> None:
    with pytest.raises(DataIntegrityError):
        _txn(1, "credit", "ten")
    with pytest.raises(DataIntegrityError):
        _txn(1, "credit", True)


def test_from_record_parses_store_rows() -> None:
    transaction = Transaction.from_record(
        {
            "id": 7,
            "type": "DEBIT",
            "amount": "12.5",
            "description": "Carpet cleaning",
            "created_by": "c1",
            "created_at": "2024-06-01T10:00:00Z",
        }
    )

    assert transaction.transaction_type is TransactionType.DEBIT
    assert transaction.amount == Decimal("12.5")
    assert transaction.created_at.isoformat() == "2024-06-01T10:00:00+00:00"
    assert transaction.as_dict()["amount"] == "12.50"


@pytest.mark.parametrize(
    "record",
    [
        {"type": "credit", "amount": "5"},
        {"id": None, "type": "credit", "amount": "5"},
        {"id": 9, "type": "credit", "amount": "5", "created_at": "yesterday"},
        {"id": 9, "type": "credit", "amount": "5", "created_at": 1717236000},
    ],
)
def test_from_record_rejects_malformed_rows(record) -> None:
    """Rows without an id or with an unreadable timestamp are integrity errors."""

    with pytest.raises(DataIntegrityError):
        Transaction.from_record(record)


def test_per_author_breakdown_omits_inactive_authors() -> None:
    """Only authors with transactions appear, each scoped to their own entries."""

    authors = [Profile("A", "Ali", Role.CASHIER), Profile("B", "Bushra", Role.CASHIER)]
    breakdown = per_author_breakdown([_txn(1, "credit", 50, "A"), _txn(2, "debit", 10, "A")], authors)

    assert len(breakdown) == 1
    entry = breakdown[0]
    assert (entry.author_id, entry.name) == ("A", "Ali")
    assert entry.credit_total == Decimal("50")
    assert entry.debit_total == Decimal("10")
    assert entry.net_total == Decimal("40")


def test_per_author_breakdown_orders_by_author_id_and_ignores_strangers() -> None:
    authors = [Profile("z9", "Zaid", Role.CASHIER), Profile("b2", "Bushra", Role.CASHIER)]
    transactions = [
        _txn(1, "credit", 5, "z9"),
        _txn(2, "credit", 7, "b2"),
        _txn(3, "credit", 100, "admin-1"),
        _txn(4, "debit", 3, None),
        _txn(5, "debit", 2, "z9"),
    ]

    breakdown = per_author_breakdown(reversed(transactions), authors)

    assert [entry.author_id for entry in breakdown] == ["b2", "z9"]
    assert breakdown[1].net_total == Decimal("3")


def test_my_transactions_preserves_relative_order() -> None:
    transactions = [
        _txn(9, "credit", 1, "A"),
        _txn(8, "debit", 2, "B"),
        _txn(7, "credit", 3, "A"),
        _txn(6, "debit", 4, "A"),
    ]

    mine = my_transactions(transactions, "A")

    assert [t.transaction_id for t in mine] == [9, 7, 6]
    assert my_transactions(transactions, "nobody") == []


def test_transaction_draft_validation() -> None:
    """Drafts need a known type, a positive amount, and optionally a description."""

    draft = TransactionDraft.create("Credit", " 250.75 ", "  Jummah box ", created_by="c1", require_description=True)
    assert draft.as_record() == {
        "type": "credit",
        "amount": "250.75",
        "description": "Jummah box",
        "created_by": "c1",
    }
    assert TransactionDraft.create("debit", "10").description is None

    for amount in ["0", "-4", "abc", "", "NaN"]:
        with pytest.raises(ValueError):
            TransactionDraft.create("credit", amount)
    with pytest.raises(ValueError):
        TransactionDraft.create("income", "10")
    with pytest.raises(ValueError):
        TransactionDraft.create("credit", "10", "   ", require_description=True)


def test_format_amount_rounds_half_up_with_label() -> None:
    assert format_amount(Decimal("10.005")) == "10.01"
    assert format_amount(Decimal("-3.5"), 0, "BDT") == "-4 BDT"
    assert format_amount(Decimal("7"), 2, "BDT") == "7.00 BDT"


def test_format_amount_handles_values_wider_than_default_precision() -> None:
    assert format_amount(Decimal("1e27")) == "1000000000000000000000000000.00"
    assert format_amount(Decimal("123456789012345678901234567890.125"), 2, "BDT") == (
        "123456789012345678901234567890.13 BDT"
    )


def test_format_amount_rejects_non_finite_values() -> None:
    with pytest.raises(DataIntegrityError):
        format_amount(Decimal("NaN"))
