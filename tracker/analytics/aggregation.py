"""Pure aggregation helpers over already fetched records.

Nothing here touches storage; every function is recomputed on each call.
"""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from tracker.core.schemas import quantize_money

T = TypeVar("T")

ZERO = Decimal("0.00")


def within_range(instant: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    """Inclusive range test; the filter only applies when both bounds are set."""
    if start is None or end is None:
        return True
    return start <= instant <= end


def sum_amounts(items: Iterable[T], predicate: Callable[[T], bool] = lambda item: True,
                amount: Callable[[T], Decimal] = lambda item: item.amount) -> Decimal:
    """Sum the amount of every item matching predicate."""
    total = sum((amount(item) for item in items if predicate(item)), ZERO)
    return quantize_money(total)


def totals_by_category(transactions: Iterable) -> List[Dict[str, object]]:
    """Group amounts by category name, largest first, ties by name."""
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for transaction in transactions:
        totals[transaction.category] += transaction.amount

    ordered = sorted(totals.items(), key=lambda pair: (-pair[1], pair[0]))
    return [
        {"category": category, "amount": quantize_money(amount)}
        for category, amount in ordered
    ]


def percentage_of_target(current: Decimal, target: Decimal) -> float:
    """current / target as a percentage; 0 when the target is not positive."""
    if target <= 0:
        return 0.0
    return round(float(Decimal(current) / Decimal(target) * 100), 2)


def loan_progress(total_amount: Decimal, remaining_amount: Decimal) -> float:
    """Share of a loan already repaid, in percent."""
    if total_amount <= 0:
        return 0.0
    progress = percentage_of_target(total_amount - remaining_amount, total_amount)
    return min(max(progress, 0.0), 100.0)


def budget_status(progress: float, alert_threshold: Decimal) -> str:
    """Classify budget consumption the same way the dashboard badges do."""
    if progress >= 100:
        return "exceeded"
    if progress >= float(alert_threshold) * 100:
        return "warning"
    if progress >= 50:
        return "on-track"
    return "good"
