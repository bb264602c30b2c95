"""Volatile storage kept in process memory."""

import itertools
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Sequence, TypeVar

from pydantic import BaseModel

from tracker.analytics import aggregation
from tracker.analytics.schemas import CategoryTotal
from tracker.bank import schemas as bank_schemas
from tracker.budget import schemas as budget_schemas
from tracker.category import schemas as category_schemas
from tracker.core.schemas import utcnow
from tracker.goal import schemas as goal_schemas
from tracker.loan import schemas as loan_schemas
from tracker.storage.base import BankAccountConflict, Storage
from tracker.transaction import schemas as transaction_schemas
from tracker.transaction.schemas import EXPENSE_TYPES, INCOME_TYPES
from tracker.user import schemas as user_schemas

M = TypeVar("M", bound=BaseModel)


class Table:
    """Rows keyed by a locally incremented integer id."""

    def __init__(self) -> None:
        self.rows: Dict[int, BaseModel] = {}
        self._ids: Iterator[int] = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def insert(self, row: M) -> M:
        self.rows[row.id] = row
        return row.model_copy()

    def get(self, row_id: int) -> Optional[M]:
        row = self.rows.get(row_id)
        return row.model_copy() if row is not None else None

    def values(self) -> List[M]:
        return [row.model_copy() for row in self.rows.values()]

    def update(self, row_id: int, updates: Dict[str, Any]) -> Optional[M]:
        row = self.rows.get(row_id)
        if row is None:
            return None
        self.rows[row_id] = row.model_copy(update=updates)
        return self.rows[row_id].model_copy()

    def delete(self, row_id: int) -> bool:
        return self.rows.pop(row_id, None) is not None


def _newest_first(transactions: List[transaction_schemas.Transaction]) -> List[transaction_schemas.Transaction]:
    return sorted(transactions, key=lambda t: (t.date, t.id), reverse=True)


class MemoryStorage(Storage):
    """Storage backed by dicts; contents live as long as the process."""

    def __init__(self) -> None:
        self.users = Table()
        self.transactions = Table()
        self.categories = Table()
        self.loans = Table()
        self.budgets = Table()
        self.goals = Table()
        self.bank_accounts = Table()
        self.bank_transactions = Table()

    # Users

    async def get_user(self, user_id: int) -> Optional[user_schemas.UserInDB]:
        return self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[user_schemas.UserInDB]:
        return next((u for u in self.users.values() if u.username == username), None)

    async def create_user(self, user: user_schemas.UserCreate, password_hash: str) -> user_schemas.UserInDB:
        return self.users.insert(user_schemas.UserInDB(
            id=self.users.next_id(),
            username=user.username,
            email=user.email,
            password=password_hash,
            created_at=utcnow(),
        ))

    async def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[user_schemas.UserInDB]:
        return self.users.update(user_id, updates)

    # Transactions

    async def get_transactions(self) -> List[transaction_schemas.Transaction]:
        return _newest_first(self.transactions.values())

    async def get_transactions_by_type(self, transaction_type: str) -> List[transaction_schemas.Transaction]:
        return _newest_first([t for t in self.transactions.values() if t.type == transaction_type])

    async def get_transactions_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[transaction_schemas.Transaction]:
        return _newest_first([
            t for t in self.transactions.values()
            if aggregation.within_range(t.date, start, end)
        ])

    async def get_transaction(self, transaction_id: int) -> Optional[transaction_schemas.Transaction]:
        return self.transactions.get(transaction_id)

    async def create_transaction(
        self, transaction: transaction_schemas.TransactionCreate
    ) -> transaction_schemas.Transaction:
        return self.transactions.insert(transaction_schemas.Transaction(
            **transaction.model_dump(),
            id=self.transactions.next_id(),
            created_at=utcnow(),
        ))

    async def create_transactions(
        self, transactions: Sequence[transaction_schemas.TransactionCreate]
    ) -> List[transaction_schemas.Transaction]:
        # Build every row before inserting any
        created_at = utcnow()
        rows = [
            transaction_schemas.Transaction(**transaction.model_dump(), id=0, created_at=created_at)
            for transaction in transactions
        ]
        return [self.transactions.insert(row.model_copy(update={"id": self.transactions.next_id()})) for row in rows]

    async def update_transaction(
        self, transaction_id: int, updates: Dict[str, Any]
    ) -> Optional[transaction_schemas.Transaction]:
        return self.transactions.update(transaction_id, updates)

    async def delete_transaction(self, transaction_id: int) -> bool:
        return self.transactions.delete(transaction_id)

    # Categories

    async def get_categories(self) -> List[category_schemas.Category]:
        return self.categories.values()

    async def get_categories_by_type(self, category_type: str) -> List[category_schemas.Category]:
        return [c for c in self.categories.values() if c.type == category_type]

    async def get_category(self, category_id: int) -> Optional[category_schemas.Category]:
        return self.categories.get(category_id)

    async def get_category_by_name(self, name: str) -> Optional[category_schemas.Category]:
        return next((c for c in self.categories.values() if c.name == name), None)

    async def has_categories(self) -> bool:
        return bool(self.categories.rows)

    async def create_category(self, category: category_schemas.CategoryCreate) -> category_schemas.Category:
        return self.categories.insert(category_schemas.Category(
            **category.model_dump(),
            id=self.categories.next_id(),
        ))

    async def create_categories(self, categories: Sequence[category_schemas.CategoryCreate]) -> int:
        for category in categories:
            await self.create_category(category)
        return len(categories)

    async def update_category(
        self, category_id: int, updates: Dict[str, Any]
    ) -> Optional[category_schemas.Category]:
        return self.categories.update(category_id, updates)

    async def delete_category(self, category_id: int) -> bool:
        return self.categories.delete(category_id)

    # Loans

    async def get_loans(self) -> List[loan_schemas.Loan]:
        return sorted(self.loans.values(), key=lambda loan: (loan.created_at, loan.id), reverse=True)

    async def get_loan(self, loan_id: int) -> Optional[loan_schemas.Loan]:
        return self.loans.get(loan_id)

    async def create_loan(self, loan: loan_schemas.LoanCreate) -> loan_schemas.Loan:
        return self.loans.insert(loan_schemas.Loan(
            **loan.model_dump(),
            id=self.loans.next_id(),
            created_at=utcnow(),
        ))

    async def update_loan(self, loan_id: int, updates: Dict[str, Any]) -> Optional[loan_schemas.Loan]:
        return self.loans.update(loan_id, updates)

    async def delete_loan(self, loan_id: int) -> bool:
        return self.loans.delete(loan_id)

    # Budgets

    async def get_budgets(self, user_id: Optional[int] = None) -> List[budget_schemas.Budget]:
        return [b for b in self.budgets.values() if user_id is None or b.user_id == user_id]

    async def get_budget(self, budget_id: int) -> Optional[budget_schemas.Budget]:
        return self.budgets.get(budget_id)

    async def create_budget(self, budget: budget_schemas.BudgetCreate) -> budget_schemas.Budget:
        return self.budgets.insert(budget_schemas.Budget(
            **budget.model_dump(),
            id=self.budgets.next_id(),
            created_at=utcnow(),
        ))

    async def update_budget(self, budget_id: int, updates: Dict[str, Any]) -> Optional[budget_schemas.Budget]:
        return self.budgets.update(budget_id, updates)

    async def delete_budget(self, budget_id: int) -> bool:
        return self.budgets.delete(budget_id)

    # Goals

    async def get_goals(self, user_id: Optional[int] = None) -> List[goal_schemas.Goal]:
        return [g for g in self.goals.values() if user_id is None or g.user_id == user_id]

    async def get_goal(self, goal_id: int) -> Optional[goal_schemas.Goal]:
        return self.goals.get(goal_id)

    async def create_goal(self, goal: goal_schemas.GoalCreate) -> goal_schemas.Goal:
        return self.goals.insert(goal_schemas.Goal(
            **goal.model_dump(),
            id=self.goals.next_id(),
            created_at=utcnow(),
        ))

    async def update_goal(self, goal_id: int, updates: Dict[str, Any]) -> Optional[goal_schemas.Goal]:
        return self.goals.update(goal_id, updates)

    async def delete_goal(self, goal_id: int) -> bool:
        return self.goals.delete(goal_id)

    # Bank data

    async def get_bank_accounts(self, user_id: int) -> List[bank_schemas.BankAccount]:
        return [a for a in self.bank_accounts.values() if a.user_id == user_id]

    async def get_bank_account(self, bank_account_id: int) -> Optional[bank_schemas.BankAccount]:
        return self.bank_accounts.get(bank_account_id)

    async def upsert_bank_account(
        self, user_id: int, account: bank_schemas.BankAccountData
    ) -> bank_schemas.BankAccount:
        existing = next(
            (a for a in self.bank_accounts.values() if a.account_id == account.account_id), None
        )
        if existing is not None:
            if existing.user_id != user_id:
                raise BankAccountConflict(account.account_id)
            return self.bank_accounts.update(existing.id, account.model_dump())
        return self.bank_accounts.insert(bank_schemas.BankAccount(
            **account.model_dump(),
            id=self.bank_accounts.next_id(),
            user_id=user_id,
            created_at=utcnow(),
        ))

    async def mark_bank_account_synced(
        self, bank_account_id: int, when: datetime
    ) -> Optional[bank_schemas.BankAccount]:
        return self.bank_accounts.update(bank_account_id, {"last_synced_at": when})

    async def add_bank_transaction(
        self,
        transaction: bank_schemas.BankTransactionCreate,
        ledger_transaction: transaction_schemas.TransactionCreate,
    ) -> Optional[bank_schemas.BankTransaction]:
        if any(t.transaction_id == transaction.transaction_id for t in self.bank_transactions.values()):
            return None
        created_at = utcnow()
        bank_row = bank_schemas.BankTransaction(**transaction.model_dump(), id=0, created_at=created_at)
        ledger_row = transaction_schemas.Transaction(**ledger_transaction.model_dump(), id=0, created_at=created_at)
        self.transactions.insert(ledger_row.model_copy(update={"id": self.transactions.next_id()}))
        return self.bank_transactions.insert(bank_row.model_copy(update={"id": self.bank_transactions.next_id()}))

    # Analytics

    def _sum_types(self, types, start: Optional[datetime], end: Optional[datetime]) -> Decimal:
        return aggregation.sum_amounts(
            self.transactions.values(),
            lambda t: t.type in types and aggregation.within_range(t.date, start, end),
        )

    async def get_total_income(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        return self._sum_types(INCOME_TYPES, start, end)

    async def get_total_expenses(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        return self._sum_types(EXPENSE_TYPES, start, end)

    async def get_total_loan_balance(self) -> Decimal:
        return aggregation.sum_amounts(
            self.loans.values(),
            lambda loan: loan.status == "active",
            amount=lambda loan: loan.remaining_amount,
        )

    async def get_category_breakdown(
        self,
        transaction_type: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[CategoryTotal]:
        matching = [
            t for t in self.transactions.values()
            if t.type == transaction_type and aggregation.within_range(t.date, start, end)
        ]
        return [CategoryTotal(**row) for row in aggregation.totals_by_category(matching)]
