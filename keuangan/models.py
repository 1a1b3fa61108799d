"""Transaction records and the derived report rows.

``Transaction.from_document`` validates raw store documents and every
Transaction checks its amount on construction, so the aggregates only ever
see finite, non-negative int or float amounts.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from .errors import TransactionValidationError

Amount = Union[int, float]

INCOME = "income"
EXPENSE = "expense"
UNCATEGORIZED = "Uncategorized"

# English abbreviations, independent of the process locale
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_label(d: dt.date) -> str:
    return f"{MONTH_ABBR[d.month - 1]} {d.year:04d}"


def _parse_date(value: Any) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if len(text) > 10 and text[10] in "T ":
            # full timestamp, day precision is enough
            text = text[:10]
        try:
            return dt.date.fromisoformat(text)
        except ValueError as exc:
            raise TransactionValidationError(f"Unrecognized date format: {value!r}") from exc
    raise TransactionValidationError(f"Invalid transaction date: {value!r}")


def _parse_amount(value: Any) -> Amount:
    """Check an amount and bring it to int or float.

    Decimals are converted so that every amount adds with every other one:
    integral values become int, the rest float.
    """
    # bool is an int subclass; strings are rejected instead of coerced
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TransactionValidationError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise TransactionValidationError(f"Amount must be finite: {value!r}")
        value = int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, float) and not math.isfinite(value):
        raise TransactionValidationError(f"Amount must be finite: {value!r}")
    if value < 0:
        raise TransactionValidationError(f"Amount must not be negative: {value!r}")
    return value


@dataclass(frozen=True)
class Transaction:
    type: str
    amount: Amount
    date: dt.date
    category: Optional[str] = None
    note: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "amount", _parse_amount(self.amount))

    @property
    def category_key(self) -> str:
        """Category bucket name; missing and blank categories share one bucket."""
        if self.category is None or not str(self.category).strip():
            return UNCATEGORIZED
        return self.category

    @property
    def month(self) -> str:
        return month_label(self.date)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Transaction":
        """Build a transaction from a store document (or a JSON body).

        Raises TransactionValidationError for a missing/unparseable date or a
        missing, non-numeric, non-finite or negative amount.
        """
        if "date" not in doc or doc.get("date") is None:
            raise TransactionValidationError("Transaction is missing a date")
        if "amount" not in doc:
            raise TransactionValidationError("Transaction is missing an amount")
        raw_id = doc.get("_id", doc.get("id"))
        category = doc.get("category")
        note = doc.get("note")
        return cls(
            type=str(doc.get("type") or ""),
            amount=doc.get("amount"),
            date=_parse_date(doc.get("date")),
            category=str(category) if category is not None else None,
            note=str(note) if note is not None else None,
            id=str(raw_id) if raw_id is not None else None,
        )

    def to_document(self) -> Dict[str, Any]:
        """Document shape written to MongoDB (BSON has no plain date type)."""
        return {
            "type": self.type,
            "amount": self.amount,
            "category": self.category,
            "date": dt.datetime(self.date.year, self.date.month, self.date.day),
            "note": self.note,
        }


@dataclass(frozen=True)
class Summary:
    income: Amount = 0
    expense: Amount = 0
    balance: Amount = 0

    def to_dict(self) -> Dict[str, Amount]:
        return asdict(self)


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    value: Amount

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyTotal:
    month: str
    income: Amount
    expense: Amount
    balance: Amount

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
