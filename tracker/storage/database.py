"""Persistent storage on a relational database through SQLAlchemy."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from tracker.analytics.schemas import CategoryTotal
from tracker.bank import schemas as bank_schemas
from tracker.bank.repository import BankRepository
from tracker.budget import schemas as budget_schemas
from tracker.budget.repository import BudgetRepository
from tracker.category import schemas as category_schemas
from tracker.category.repository import CategoryRepository
from tracker.core.database import DatabaseManager
from tracker.goal import schemas as goal_schemas
from tracker.goal.repository import GoalRepository
from tracker.loan import schemas as loan_schemas
from tracker.loan.repository import LoanRepository
from tracker.storage.base import BankAccountConflict, Storage
from tracker.transaction import schemas as transaction_schemas
from tracker.transaction.repository import TransactionRepository
from tracker.transaction.schemas import EXPENSE_TYPES, INCOME_TYPES
from tracker.user import schemas as user_schemas
from tracker.user.repository import UserRepository

# Register every model on Base.metadata before tables are created
import tracker.bank.models  # noqa: F401
import tracker.budget.models  # noqa: F401
import tracker.category.models  # noqa: F401
import tracker.goal.models  # noqa: F401
import tracker.loan.models  # noqa: F401
import tracker.transaction.models  # noqa: F401
import tracker.user.models  # noqa: F401

S = TypeVar("S", bound=BaseModel)


def _one(schema: Type[S], row) -> Optional[S]:
    return schema.model_validate(row) if row is not None else None


def _many(schema: Type[S], rows) -> List[S]:
    return [schema.model_validate(row) for row in rows]


class DatabaseStorage(Storage):
    """Storage where every call runs in its own session."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        self.db = db_manager

    async def initialize(self) -> None:
        await self.db.create_tables()

    async def close(self) -> None:
        await self.db.dispose()

    # Users

    async def get_user(self, user_id: int) -> Optional[user_schemas.UserInDB]:
        async with self.db.get_db() as session:
            return _one(user_schemas.UserInDB, await UserRepository(session).get_by_id(user_id))

    async def get_user_by_username(self, username: str) -> Optional[user_schemas.UserInDB]:
        async with self.db.get_db() as session:
            return _one(user_schemas.UserInDB, await UserRepository(session).get_by_username(username))

    async def create_user(self, user: user_schemas.UserCreate, password_hash: str) -> user_schemas.UserInDB:
        async with self.db.get_db() as session:
            return _one(user_schemas.UserInDB, await UserRepository(session).create(user, password_hash))

    async def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[user_schemas.UserInDB]:
        async with self.db.get_db() as session:
            return _one(user_schemas.UserInDB, await UserRepository(session).update(user_id, updates))

    # Transactions

    async def get_transactions(self) -> List[transaction_schemas.Transaction]:
        async with self.db.get_db() as session:
            return _many(transaction_schemas.Transaction, await TransactionRepository(session).get_all())

    async def get_transactions_by_type(self, transaction_type: str) -> List[transaction_schemas.Transaction]:
        async with self.db.get_db() as session:
            rows = await TransactionRepository(session).get_by_type(transaction_type)
            return _many(transaction_schemas.Transaction, rows)

    async def get_transactions_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[transaction_schemas.Transaction]:
        async with self.db.get_db() as session:
            rows = await TransactionRepository(session).get_by_date_range(start, end)
            return _many(transaction_schemas.Transaction, rows)

    async def get_transaction(self, transaction_id: int) -> Optional[transaction_schemas.Transaction]:
        async with self.db.get_db() as session:
            row = await TransactionRepository(session).get_by_id(transaction_id)
            return _one(transaction_schemas.Transaction, row)

    async def create_transaction(
        self, transaction: transaction_schemas.TransactionCreate
    ) -> transaction_schemas.Transaction:
        async with self.db.get_db() as session:
            row = await TransactionRepository(session).create(transaction)
            return _one(transaction_schemas.Transaction, row)

    async def create_transactions(
        self, transactions: Sequence[transaction_schemas.TransactionCreate]
    ) -> List[transaction_schemas.Transaction]:
        async with self.db.get_db() as session:
            rows = await TransactionRepository(session).create_many(transactions)
            return _many(transaction_schemas.Transaction, rows)

    async def update_transaction(
        self, transaction_id: int, updates: Dict[str, Any]
    ) -> Optional[transaction_schemas.Transaction]:
        async with self.db.get_db() as session:
            row = await TransactionRepository(session).update(transaction_id, updates)
            return _one(transaction_schemas.Transaction, row)

    async def delete_transaction(self, transaction_id: int) -> bool:
        async with self.db.get_db() as session:
            return await TransactionRepository(session).delete(transaction_id)

    # Categories

    async def get_categories(self) -> List[category_schemas.Category]:
        async with self.db.get_db() as session:
            return _many(category_schemas.Category, await CategoryRepository(session).get_all())

    async def get_categories_by_type(self, category_type: str) -> List[category_schemas.Category]:
        async with self.db.get_db() as session:
            rows = await CategoryRepository(session).get_by_type(category_type)
            return _many(category_schemas.Category, rows)

    async def get_category(self, category_id: int) -> Optional[category_schemas.Category]:
        async with self.db.get_db() as session:
            return _one(category_schemas.Category, await CategoryRepository(session).get_by_id(category_id))

    async def get_category_by_name(self, name: str) -> Optional[category_schemas.Category]:
        async with self.db.get_db() as session:
            return _one(category_schemas.Category, await CategoryRepository(session).get_by_name(name))

    async def has_categories(self) -> bool:
        async with self.db.get_db() as session:
            return await CategoryRepository(session).any_exists()

    async def create_category(self, category: category_schemas.CategoryCreate) -> category_schemas.Category:
        async with self.db.get_db() as session:
            return _one(category_schemas.Category, await CategoryRepository(session).create(category))

    async def create_categories(self, categories: Sequence[category_schemas.CategoryCreate]) -> int:
        async with self.db.get_db() as session:
            return await CategoryRepository(session).create_many(categories)

    async def update_category(
        self, category_id: int, updates: Dict[str, Any]
    ) -> Optional[category_schemas.Category]:
        async with self.db.get_db() as session:
            row = await CategoryRepository(session).update(category_id, updates)
            return _one(category_schemas.Category, row)

    async def delete_category(self, category_id: int) -> bool:
        async with self.db.get_db() as session:
            return await CategoryRepository(session).delete(category_id)

    # Loans

    async def get_loans(self) -> List[loan_schemas.Loan]:
        async with self.db.get_db() as session:
            return _many(loan_schemas.Loan, await LoanRepository(session).get_all())

    async def get_loan(self, loan_id: int) -> Optional[loan_schemas.Loan]:
        async with self.db.get_db() as session:
            return _one(loan_schemas.Loan, await LoanRepository(session).get_by_id(loan_id))

    async def create_loan(self, loan: loan_schemas.LoanCreate) -> loan_schemas.Loan:
        async with self.db.get_db() as session:
            return _one(loan_schemas.Loan, await LoanRepository(session).create(loan))

    async def update_loan(self, loan_id: int, updates: Dict[str, Any]) -> Optional[loan_schemas.Loan]:
        async with self.db.get_db() as session:
            return _one(loan_schemas.Loan, await LoanRepository(session).update(loan_id, updates))

    async def delete_loan(self, loan_id: int) -> bool:
        async with self.db.get_db() as session:
            return await LoanRepository(session).delete(loan_id)

    # Budgets

    async def get_budgets(self, user_id: Optional[int] = None) -> List[budget_schemas.Budget]:
        async with self.db.get_db() as session:
            return _many(budget_schemas.Budget, await BudgetRepository(session).get_all(user_id))

    async def get_budget(self, budget_id: int) -> Optional[budget_schemas.Budget]:
        async with self.db.get_db() as session:
            return _one(budget_schemas.Budget, await BudgetRepository(session).get_by_id(budget_id))

    async def create_budget(self, budget: budget_schemas.BudgetCreate) -> budget_schemas.Budget:
        async with self.db.get_db() as session:
            return _one(budget_schemas.Budget, await BudgetRepository(session).create(budget))

    async def update_budget(self, budget_id: int, updates: Dict[str, Any]) -> Optional[budget_schemas.Budget]:
        async with self.db.get_db() as session:
            return _one(budget_schemas.Budget, await BudgetRepository(session).update(budget_id, updates))

    async def delete_budget(self, budget_id: int) -> bool:
        async with self.db.get_db() as session:
            return await BudgetRepository(session).delete(budget_id)

    # Goals

    async def get_goals(self, user_id: Optional[int] = None) -> List[goal_schemas.Goal]:
        async with self.db.get_db() as session:
            return _many(goal_schemas.Goal, await GoalRepository(session).get_all(user_id))

    async def get_goal(self, goal_id: int) -> Optional[goal_schemas.Goal]:
        async with self.db.get_db() as session:
            return _one(goal_schemas.Goal, await GoalRepository(session).get_by_id(goal_id))

    async def create_goal(self, goal: goal_schemas.GoalCreate) -> goal_schemas.Goal:
        async with self.db.get_db() as session:
            return _one(goal_schemas.Goal, await GoalRepository(session).create(goal))

    async def update_goal(self, goal_id: int, updates: Dict[str, Any]) -> Optional[goal_schemas.Goal]:
        async with self.db.get_db() as session:
            return _one(goal_schemas.Goal, await GoalRepository(session).update(goal_id, updates))

    async def delete_goal(self, goal_id: int) -> bool:
        async with self.db.get_db() as session:
            return await GoalRepository(session).delete(goal_id)

    # Bank data

    async def get_bank_accounts(self, user_id: int) -> List[bank_schemas.BankAccount]:
        async with self.db.get_db() as session:
            return _many(bank_schemas.BankAccount, await BankRepository(session).get_accounts(user_id))

    async def get_bank_account(self, bank_account_id: int) -> Optional[bank_schemas.BankAccount]:
        async with self.db.get_db() as session:
            row = await BankRepository(session).get_account(bank_account_id)
            return _one(bank_schemas.BankAccount, row)

    async def upsert_bank_account(
        self, user_id: int, account: bank_schemas.BankAccountData
    ) -> bank_schemas.BankAccount:
        async with self.db.get_db() as session:
            row = await BankRepository(session).upsert_account(user_id, account)
            if row is None:
                raise BankAccountConflict(account.account_id)
            return _one(bank_schemas.BankAccount, row)

    async def mark_bank_account_synced(
        self, bank_account_id: int, when: datetime
    ) -> Optional[bank_schemas.BankAccount]:
        async with self.db.get_db() as session:
            row = await BankRepository(session).mark_synced(bank_account_id, when)
            return _one(bank_schemas.BankAccount, row)

    async def add_bank_transaction(
        self,
        transaction: bank_schemas.BankTransactionCreate,
        ledger_transaction: transaction_schemas.TransactionCreate,
    ) -> Optional[bank_schemas.BankTransaction]:
        async with self.db.get_db() as session:
            row = await BankRepository(session).add_transaction(transaction, ledger_transaction)
            return _one(bank_schemas.BankTransaction, row)

    # Analytics

    async def get_total_income(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        async with self.db.get_db() as session:
            return await TransactionRepository(session).sum_amount(INCOME_TYPES, start, end)

    async def get_total_expenses(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        async with self.db.get_db() as session:
            return await TransactionRepository(session).sum_amount(EXPENSE_TYPES, start, end)

    async def get_total_loan_balance(self) -> Decimal:
        async with self.db.get_db() as session:
            return await LoanRepository(session).total_active_remaining()

    async def get_category_breakdown(
        self,
        transaction_type: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[CategoryTotal]:
        async with self.db.get_db() as session:
            rows = await TransactionRepository(session).category_breakdown(transaction_type, start, end)
            return [CategoryTotal(**row) for row in rows]
