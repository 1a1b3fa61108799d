"""Aggregation of transactions into the dashboard views.

Three pure functions turn an ordered sequence of transactions into:
    - a Summary (income, expense, balance),
    - per-category expense totals,
    - a per-month income/expense/balance series.

Groupings keep the first-seen order of their keys, which is what the charts
display. Nothing here performs I/O or keeps state between calls.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, Iterator, List, Mapping, Sequence, Tuple, TypeVar

from .models import (
    EXPENSE,
    INCOME,
    Amount,
    CategoryTotal,
    MonthlyTotal,
    Summary,
    Transaction,
)

V = TypeVar("V")


class RunningTotals(Generic[V]):
    """Insertion-ordered key -> accumulator mapping.

    Iteration yields keys in the order they were first added, regardless of
    how many times they were updated afterwards.
    """

    def __init__(self, factory=None):
        self._factory = factory
        self._totals: Dict[str, V] = {}

    def add(self, key: str, amount: Amount) -> None:
        if key in self._totals:
            self._totals[key] += amount
        else:
            self._totals[key] = amount

    def slot(self, key: str) -> V:
        """Return the accumulator for ``key``, creating it on first sight."""
        if key not in self._totals:
            self._totals[key] = self._factory()
        return self._totals[key]

    def items(self) -> Iterator[Tuple[str, V]]:
        return iter(self._totals.items())

    def __contains__(self, key: object) -> bool:
        return key in self._totals

    def __len__(self) -> int:
        return len(self._totals)


class _MonthBucket:
    __slots__ = ("income", "expense")

    def __init__(self):
        self.income: Amount = 0
        self.expense: Amount = 0


def to_transactions(docs: Iterable[Mapping[str, Any]]) -> List[Transaction]:
    """Validate raw documents; the first malformed one aborts the whole batch."""
    return [d if isinstance(d, Transaction) else Transaction.from_document(d) for d in docs]


def compute_summary(txns: Iterable[Transaction]) -> Summary:
    txns = list(txns)
    income = sum((t.amount for t in txns if t.type == INCOME), 0)
    expense = sum((t.amount for t in txns if t.type == EXPENSE), 0)
    return Summary(income=income, expense=expense, balance=income - expense)


def compute_category_totals(txns: Iterable[Transaction]) -> List[CategoryTotal]:
    totals: RunningTotals[Amount] = RunningTotals()
    for t in txns:
        if t.type == EXPENSE:
            totals.add(t.category_key, t.amount)
    return [CategoryTotal(name=name, value=value) for name, value in totals.items()]


def compute_monthly_trend(txns: Iterable[Transaction], chronological: bool = False) -> List[MonthlyTotal]:
    """Income/expense/balance per calendar month.

    Every transaction registers its month, including ones whose type is
    neither income nor expense (they add nothing to the sums). Months come
    out in first-seen order unless ``chronological`` is set.
    """
    months: RunningTotals[_MonthBucket] = RunningTotals(_MonthBucket)
    first_day: Dict[str, Tuple[int, int]] = {}
    for t in txns:
        key = t.month
        bucket = months.slot(key)
        first_day.setdefault(key, (t.date.year, t.date.month))
        if t.type == INCOME:
            bucket.income += t.amount
        elif t.type == EXPENSE:
            bucket.expense += t.amount

    rows = [
        MonthlyTotal(month=m, income=b.income, expense=b.expense, balance=b.income - b.expense)
        for m, b in months.items()
    ]
    if chronological:
        rows.sort(key=lambda r: first_day[r.month])
    return rows


def build_dashboard(txns: Sequence[Transaction], chronological: bool = False) -> Dict[str, Any]:
    """All three views as JSON-ready data."""
    txns = list(txns)
    return {
        "summary": compute_summary(txns).to_dict(),
        "categories": [c.to_dict() for c in compute_category_totals(txns)],
        "monthly": [m.to_dict() for m in compute_monthly_trend(txns, chronological=chronological)],
    }
