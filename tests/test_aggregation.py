from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from tracker.analytics import aggregation


def test_loan_progress():
    assert aggregation.loan_progress(Decimal("100"), Decimal("40")) == 60.0
    assert aggregation.loan_progress(Decimal("100"), Decimal("0")) == 100.0
    assert aggregation.loan_progress(Decimal("0"), Decimal("0")) == 0.0
    assert aggregation.loan_progress(Decimal("100"), Decimal("150")) == 0.0
    assert aggregation.loan_progress(Decimal("100"), Decimal("-20")) == 100.0


def test_percentage_of_target():
    assert aggregation.percentage_of_target(Decimal("1"), Decimal("3")) == 33.33
    assert aggregation.percentage_of_target(Decimal("50"), Decimal("0")) == 0.0
    assert aggregation.percentage_of_target(Decimal("50"), Decimal("-10")) == 0.0


def test_budget_status_thresholds():
    threshold = Decimal("0.80")
    assert aggregation.budget_status(120.0, threshold) == "exceeded"
    assert aggregation.budget_status(100.0, threshold) == "exceeded"
    assert aggregation.budget_status(80.0, threshold) == "warning"
    assert aggregation.budget_status(79.99, threshold) == "on-track"
    assert aggregation.budget_status(50.0, threshold) == "on-track"
    assert aggregation.budget_status(49.0, threshold) == "good"


def test_within_range_is_inclusive_and_needs_both_bounds():
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 31)

    assert aggregation.within_range(start, start, end)
    assert aggregation.within_range(end, start, end)
    assert not aggregation.within_range(datetime(2024, 2, 1), start, end)
    assert aggregation.within_range(datetime(1999, 1, 1), start, None)


def test_totals_by_category_orders_by_amount_then_name():
    rows = [
        SimpleNamespace(category="Food", amount=Decimal("10")),
        SimpleNamespace(category="Rent", amount=Decimal("30")),
        SimpleNamespace(category="Fuel", amount=Decimal("15")),
        SimpleNamespace(category="Food", amount=Decimal("5")),
    ]

    totals = aggregation.totals_by_category(rows)
    assert [(row["category"], row["amount"]) for row in totals] == [
        ("Rent", Decimal("30.00")),
        ("Food", Decimal("15.00")),
        ("Fuel", Decimal("15.00")),
    ]


def test_sum_amounts_with_predicate():
    rows = [SimpleNamespace(amount=Decimal("0.10")) for _ in range(3)]

    assert aggregation.sum_amounts(rows) == Decimal("0.30")
    assert aggregation.sum_amounts(rows, lambda row: False) == Decimal("0.00")
