from __future__ import annotations

from decimal import Decimal

import pytest

from keuangan import analytics as an
from keuangan.errors import TransactionValidationError
from keuangan.models import UNCATEGORIZED, CategoryTotal, MonthlyTotal, Summary
from tests.helpers.factories import txn


@pytest.fixture
def scenario(scenario_docs):
    return an.to_transactions(scenario_docs)


@pytest.fixture
def mixed():
    return [
        txn("expense", 50, "2024-03-02", "transport"),
        txn("income", 5000, "2024-01-25", "salary"),
        txn("expense", 120, "2024-01-03", "food"),
        txn("refund", 30, "2024-04-11", "food"),
        txn("expense", 75, "2024-03-15", None),
        txn("expense", 25, "2024-01-19", ""),
        txn("income", 0, "2024-03-01"),
        txn("expense", 10**12, "2023-12-31", "house"),
    ]


def test_scenario_summary(scenario):
    assert an.compute_summary(scenario) == Summary(income=1000, expense=500, balance=500)


def test_scenario_category_totals(scenario):
    assert an.compute_category_totals(scenario) == [CategoryTotal(name="food", value=500)]


def test_scenario_monthly_trend(scenario):
    assert [m.to_dict() for m in an.compute_monthly_trend(scenario)] == [
        {"month": "Jan 2024", "income": 1000, "expense": 300, "balance": 700},
        {"month": "Feb 2024", "income": 0, "expense": 200, "balance": -200},
    ]


def test_empty_input():
    assert an.compute_summary([]).to_dict() == {"income": 0, "expense": 0, "balance": 0}
    assert an.compute_category_totals([]) == []
    assert an.compute_monthly_trend([]) == []
    assert an.build_dashboard([]) == {
        "summary": {"income": 0, "expense": 0, "balance": 0},
        "categories": [],
        "monthly": [],
    }


def test_missing_and_blank_category_share_one_bucket(mixed):
    totals = {c.name: c.value for c in an.compute_category_totals(mixed)}
    assert totals[UNCATEGORIZED] == 100
    names = [c.name for c in an.compute_category_totals(mixed)]
    assert names.count(UNCATEGORIZED) == 1


def test_unknown_type_is_excluded_everywhere(mixed):
    summary = an.compute_summary(mixed)
    assert summary.income == 5000
    assert summary.expense == 50 + 120 + 75 + 25 + 10**12

    food = [c for c in an.compute_category_totals(mixed) if c.name == "food"]
    assert food == [CategoryTotal(name="food", value=120)]

    april = [m for m in an.compute_monthly_trend(mixed) if m.month == "Apr 2024"]
    assert april == [MonthlyTotal(month="Apr 2024", income=0, expense=0, balance=0)]


def test_category_order_is_first_seen(mixed):
    names = [c.name for c in an.compute_category_totals(mixed)]
    assert names == ["transport", "food", UNCATEGORIZED, "house"]


def test_monthly_order_is_first_seen_unless_chronological(mixed):
    first_seen = [m.month for m in an.compute_monthly_trend(mixed)]
    assert first_seen == ["Mar 2024", "Jan 2024", "Apr 2024", "Dec 2023"]

    ordered = [m.month for m in an.compute_monthly_trend(mixed, chronological=True)]
    assert ordered == ["Dec 2023", "Jan 2024", "Mar 2024", "Apr 2024"]


def test_totals_are_consistent(mixed):
    summary = an.compute_summary(mixed)
    assert summary.balance == summary.income - summary.expense

    categories = an.compute_category_totals(mixed)
    assert sum(c.value for c in categories) == summary.expense
    assert len({c.name for c in categories}) == len(categories)

    monthly = an.compute_monthly_trend(mixed)
    assert all(m.balance == m.income - m.expense for m in monthly)
    assert sum(m.income for m in monthly) == summary.income
    assert sum(m.expense for m in monthly) == summary.expense


def test_repeated_calls_give_identical_output(mixed):
    assert an.build_dashboard(mixed) == an.build_dashboard(mixed)
    assert an.compute_monthly_trend(mixed) == an.compute_monthly_trend(mixed)


def test_decimal_and_float_amounts_add_together():
    txns = [
        txn("income", Decimal("1500"), "2024-05-01"),
        txn("income", 2.5, "2024-05-02"),
        txn("expense", Decimal("0.5"), "2024-05-03", "fees"),
        txn("expense", 1, "2024-05-04", "fees"),
    ]
    summary = an.compute_summary(txns)
    assert summary == Summary(income=1502.5, expense=1.5, balance=1501.0)
    assert an.compute_category_totals(txns) == [CategoryTotal(name="fees", value=1.5)]
    assert an.compute_monthly_trend(txns)[0].balance == summary.balance


def test_malformed_date_aborts_the_batch(scenario_docs):
    docs = scenario_docs + [{"type": "expense", "amount": 10, "category": "food", "date": "31/02/2024"}]
    with pytest.raises(TransactionValidationError):
        an.to_transactions(docs)


def test_running_totals_keeps_first_seen_order():
    totals = an.RunningTotals()
    totals.add("b", 1)
    totals.add("a", 2)
    totals.add("b", 3)
    assert list(totals.items()) == [("b", 4), ("a", 2)]
    assert "a" in totals and len(totals) == 2
