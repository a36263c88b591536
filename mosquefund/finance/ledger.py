"""Mini README: Ledger records and the balance folds computed over them.

Structure:
    * TransactionType - enum representing credit versus debit entries.
    * Transaction - a stored ledger entry as read back from the store.
    * TransactionDraft - validated user input waiting to be inserted.
    * LedgerSummary / AuthorTotals - folded figures handed to views.
    * summarize, per_author_breakdown, my_transactions - pure helpers.

Amounts are ``Decimal`` magnitudes; the sign comes only from the type.
Totals are accumulated exactly and rounded only when rendered, so the folds
give identical results for any input order. A record with an unrecognised
type is counted but excluded from both sums. A missing or NaN amount raises
``DataIntegrityError`` instead of leaking into the totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, Inexact, InvalidOperation, getcontext, localcontext
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..accounts.profiles import Profile
from ..errors import DataIntegrityError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

ZERO = Decimal("0")
LEDGER_DIGITS = 60


class TransactionType(str, Enum):
    """Enumerate the supported ledger entry kinds."""

    CREDIT = "credit"
    DEBIT = "debit"

    @classmethod
    def from_str(cls, value: str) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


@dataclass(frozen=True, slots=True)
class Transaction:
    """A ledger entry owned by the store; the client never edits it in place."""

    transaction_id: Union[int, str]
    transaction_type: Union[TransactionType, str]
    amount: Optional[Decimal]
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        """Build a transaction from a store row.

        Unknown type strings are kept verbatim so the folds can skip them;
        a null amount is kept as ``None`` and rejected when folded. A row
        without an id or with an unreadable timestamp raises
        ``DataIntegrityError``.
        """

        if record.get("id") is None:
            raise DataIntegrityError("Transaction record has no id")
        transaction_id = record["id"]
        raw_type = record.get("type")
        try:
            transaction_type: Union[TransactionType, str] = TransactionType.from_str(str(raw_type))
        except ValueError:
            transaction_type = str(raw_type)
        try:
            created_at = _parse_timestamp(record.get("created_at"))
        except (TypeError, ValueError) as error:
            raise DataIntegrityError(
                f"Transaction {transaction_id} has an invalid timestamp: {record.get('created_at')!r}"
            ) from error
        created_by = record.get("created_by")
        return cls(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            amount=_parse_amount(record.get("amount"), transaction_id),
            description=record.get("description"),
            created_by=None if created_by is None else str(created_by),
            created_at=created_at,
        )

    @property
    def is_credit(self) -> bool:
        return self.transaction_type is TransactionType.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.transaction_type is TransactionType.DEBIT

    def as_dict(self, precision: int = 2) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        kind = self.transaction_type
        return {
            "id": self.transaction_id,
            "type": kind.value if isinstance(kind, TransactionType) else kind,
            "amount": None if self.amount is None else format_amount(self.amount, precision),
            "description": self.description,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True, slots=True)
class TransactionDraft:
    """Validated fields for a new entry; the store assigns id and timestamp."""

    transaction_type: TransactionType
    amount: Decimal
    description: Optional[str] = None
    created_by: Optional[str] = None

    @classmethod
    def create(
        cls,
        transaction_type: str,
        amount: object,
        description: Optional[str] = None,
        created_by: Optional[str] = None,
        *,
        require_description: bool = False,
    ) -> "TransactionDraft":
        """Validate raw form input, raising ``ValueError`` on bad fields."""

        kind = TransactionType.from_str(str(transaction_type))
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as error:
            raise ValueError("Please enter a valid amount") from error
        if not value.is_finite() or value <= ZERO:
            raise ValueError("Please enter a valid amount")
        text = (description or "").strip() or None
        if require_description and text is None:
            raise ValueError("Please enter a description")
        return cls(transaction_type=kind, amount=value, description=text, created_by=created_by)

    def as_record(self) -> Dict[str, object]:
        """Row payload for the transaction table."""

        return {
            "type": self.transaction_type.value,
            "amount": str(self.amount),
            "description": self.description,
            "created_by": self.created_by,
        }


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Aggregate figures over a collection of transactions."""

    credit_total: Decimal
    debit_total: Decimal
    net_balance: Decimal
    count: int

    def as_dict(self, precision: int = 2) -> Dict[str, object]:
        return {
            "credit_total": format_amount(self.credit_total, precision),
            "debit_total": format_amount(self.debit_total, precision),
            "net_balance": format_amount(self.net_balance, precision),
            "count": self.count,
        }


@dataclass(frozen=True, slots=True)
class AuthorTotals:
    """Totals scoped to the transactions one author created."""

    author_id: str
    name: str
    credit_total: Decimal
    debit_total: Decimal
    net_total: Decimal

    def as_dict(self, precision: int = 2) -> Dict[str, object]:
        return {
            "author_id": self.author_id,
            "name": self.name,
            "credit_total": format_amount(self.credit_total, precision),
            "debit_total": format_amount(self.debit_total, precision),
            "net_total": format_amount(self.net_total, precision),
        }


def _parse_amount(value: object, transaction_id: object) -> Optional[Decimal]:
    """Coerce a stored amount to ``Decimal``; ``None`` passes through."""

    if value is None:
        return None
    if isinstance(value, bool):
        raise DataIntegrityError(f"Transaction {transaction_id} has a non-numeric amount")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise DataIntegrityError(
            f"Transaction {transaction_id} has a non-numeric amount: {value!r}"
        ) from error


def _parse_timestamp(value: object) -> Optional[datetime]:
    """Parse ISO timestamps as returned by the store."""

    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError("Timestamps must be ISO strings or datetime instances.")


def _checked_amount(transaction: Transaction) -> Decimal:
    amount = transaction.amount
    if amount is None:
        raise DataIntegrityError(f"Transaction {transaction.transaction_id} has no amount")
    if not amount.is_finite():
        raise DataIntegrityError(
            f"Transaction {transaction.transaction_id} has a non-finite amount"
        )
    if amount < ZERO:
        raise DataIntegrityError(
            f"Transaction {transaction.transaction_id} has a negative amount"
        )
    return amount


def _exact_context():
    """Decimal context for the folds: wide precision, rounding is an error."""

    context = getcontext().copy()
    context.prec = LEDGER_DIGITS
    context.traps[Inexact] = True
    return localcontext(context)


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Fold transactions into credit, debit, and net totals.

    Sums are exact. A total that would need more than ``LEDGER_DIGITS``
    significant digits raises ``DataIntegrityError`` instead of rounding.
    """

    credit_total = ZERO
    debit_total = ZERO
    count = 0
    skipped = 0
    try:
        with _exact_context():
            for transaction in transactions:
                amount = _checked_amount(transaction)
                count += 1
                if transaction.is_credit:
                    credit_total += amount
                elif transaction.is_debit:
                    debit_total += amount
                else:
                    skipped += 1
            net_balance = credit_total - debit_total
    except Inexact as error:
        raise DataIntegrityError(
            f"Ledger totals exceed {LEDGER_DIGITS} significant digits"
        ) from error
    if skipped:
        LOGGER.warning("Excluded %s transactions with an unrecognised type from totals", skipped)
    return LedgerSummary(
        credit_total=credit_total,
        debit_total=debit_total,
        net_balance=net_balance,
        count=count,
    )


def per_author_breakdown(
    transactions: Iterable[Transaction], authors: Iterable[Profile]
) -> List[AuthorTotals]:
    """Totals per known author, omitting authors without transactions.

    Results are ordered by ``author_id`` ascending. Transactions whose
    author is unknown or missing are ignored.
    """

    names = {author.profile_id: author.name for author in authors}
    grouped: Dict[str, List[Transaction]] = {}
    for transaction in transactions:
        if transaction.created_by in names:
            grouped.setdefault(transaction.created_by, []).append(transaction)

    breakdown: List[AuthorTotals] = []
    for author_id in sorted(grouped):
        summary = summarize(grouped[author_id])
        breakdown.append(
            AuthorTotals(
                author_id=author_id,
                name=names[author_id],
                credit_total=summary.credit_total,
                debit_total=summary.debit_total,
                net_total=summary.net_balance,
            )
        )
    return breakdown


def my_transactions(transactions: Sequence[Transaction], author_id: str) -> List[Transaction]:
    """Entries created by ``author_id`` in their original relative order.

    This only scopes what a view displays; it is not an access boundary.
    """

    return [transaction for transaction in transactions if transaction.created_by == author_id]


def format_amount(amount: Decimal, precision: int = 2, currency: Optional[str] = None) -> str:
    """Round half-up to ``precision`` digits and optionally append a label."""

    if not amount.is_finite():
        raise DataIntegrityError(f"Cannot display a non-finite amount: {amount}")
    quantum = Decimal(1).scaleb(-precision)
    try:
        with localcontext() as context:
            context.prec = max(context.prec, amount.adjusted() + precision + 2)
            text = str(amount.quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation as error:
        raise DataIntegrityError(f"Cannot display amount {amount}") from error
    return f"{text} {currency}" if currency else text
