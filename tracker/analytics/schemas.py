"""Analytics schemas."""

from decimal import Decimal
from typing import Dict, Optional

from tracker.core.schemas import CamelModel


class Overview(CamelModel):
    """Dashboard totals."""
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    total_loan_balance: Decimal
    # Display strings, only when a currency was requested
    formatted: Optional[Dict[str, str]] = None


class CategoryTotal(CamelModel):
    """Sum of one category's transactions."""
    category: str
    amount: Decimal
