"""Categories every fresh store starts with."""

from typing import List

from tracker.category.schemas import CategoryCreate


def _category(name: str, type_: str, color: str, icon: str) -> CategoryCreate:
    return CategoryCreate(name=name, type=type_, color=color, icon=icon)


DEFAULT_CATEGORIES: List[CategoryCreate] = [
    # Income
    _category("Salary", "income", "#059669", "dollar-sign"),
    _category("Freelance", "income", "#0891b2", "briefcase"),
    _category("Investment", "income", "#7c3aed", "trending-up"),
    _category("Other Income", "income", "#059669", "plus-circle"),
    # Expense
    _category("Food & Dining", "expense", "#dc2626", "utensils"),
    _category("Transportation", "expense", "#ea580c", "car"),
    _category("Shopping", "expense", "#d97706", "shopping-bag"),
    _category("Utilities", "expense", "#dc2626", "zap"),
    _category("Entertainment", "expense", "#7c2d12", "film"),
    _category("Healthcare", "expense", "#be123c", "heart"),
    _category("Education", "expense", "#9333ea", "book"),
    _category("Other Expenses", "expense", "#dc2626", "minus-circle"),
    # Business
    _category("Office Supplies", "business", "#2563eb", "clipboard"),
    _category("Marketing", "business", "#7c3aed", "megaphone"),
    _category("Travel", "business", "#0891b2", "plane"),
    _category("Equipment", "business", "#059669", "monitor"),
    # Loan
    _category("Loan Payment", "loan", "#d97706", "handshake"),
    _category("Interest", "loan", "#dc2626", "percent"),
]
