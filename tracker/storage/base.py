"""Storage contract shared by the in-memory and database backends."""

import abc
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from tracker.analytics.schemas import CategoryTotal, Overview
from tracker.bank import schemas as bank_schemas
from tracker.budget import schemas as budget_schemas
from tracker.category import schemas as category_schemas
from tracker.category.defaults import DEFAULT_CATEGORIES
from tracker.goal import schemas as goal_schemas
from tracker.loan import schemas as loan_schemas
from tracker.transaction import schemas as transaction_schemas
from tracker.user import schemas as user_schemas

logger = logging.getLogger(__name__)


class BankAccountConflict(Exception):
    """The aggregator account is already linked to another user."""


class Storage(abc.ABC):
    """CRUD and aggregate queries over every record type.

    Updates on a missing id return None and deletes return whether a row
    existed; callers turn both into 404 responses.
    """

    async def initialize(self) -> None:
        """Prepare the backend (create tables, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    # Users

    @abc.abstractmethod
    async def get_user(self, user_id: int) -> Optional[user_schemas.UserInDB]: ...

    @abc.abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[user_schemas.UserInDB]: ...

    @abc.abstractmethod
    async def create_user(self, user: user_schemas.UserCreate, password_hash: str) -> user_schemas.UserInDB: ...

    @abc.abstractmethod
    async def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[user_schemas.UserInDB]: ...

    # Transactions

    @abc.abstractmethod
    async def get_transactions(self) -> List[transaction_schemas.Transaction]: ...

    @abc.abstractmethod
    async def get_transactions_by_type(self, transaction_type: str) -> List[transaction_schemas.Transaction]: ...

    @abc.abstractmethod
    async def get_transactions_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[transaction_schemas.Transaction]: ...

    @abc.abstractmethod
    async def get_transaction(self, transaction_id: int) -> Optional[transaction_schemas.Transaction]: ...

    @abc.abstractmethod
    async def create_transaction(
        self, transaction: transaction_schemas.TransactionCreate
    ) -> transaction_schemas.Transaction: ...

    @abc.abstractmethod
    async def create_transactions(
        self, transactions: Sequence[transaction_schemas.TransactionCreate]
    ) -> List[transaction_schemas.Transaction]:
        """Store every transaction or, if any write fails, none of them."""

    @abc.abstractmethod
    async def update_transaction(
        self, transaction_id: int, updates: Dict[str, Any]
    ) -> Optional[transaction_schemas.Transaction]: ...

    @abc.abstractmethod
    async def delete_transaction(self, transaction_id: int) -> bool: ...

    # Categories

    @abc.abstractmethod
    async def get_categories(self) -> List[category_schemas.Category]: ...

    @abc.abstractmethod
    async def get_categories_by_type(self, category_type: str) -> List[category_schemas.Category]: ...

    @abc.abstractmethod
    async def get_category(self, category_id: int) -> Optional[category_schemas.Category]: ...

    @abc.abstractmethod
    async def get_category_by_name(self, name: str) -> Optional[category_schemas.Category]: ...

    @abc.abstractmethod
    async def has_categories(self) -> bool: ...

    @abc.abstractmethod
    async def create_category(self, category: category_schemas.CategoryCreate) -> category_schemas.Category: ...

    @abc.abstractmethod
    async def create_categories(self, categories: Sequence[category_schemas.CategoryCreate]) -> int: ...

    @abc.abstractmethod
    async def update_category(
        self, category_id: int, updates: Dict[str, Any]
    ) -> Optional[category_schemas.Category]: ...

    @abc.abstractmethod
    async def delete_category(self, category_id: int) -> bool: ...

    async def seed_default_categories(self) -> int:
        """Insert the default categories unless any category exists already."""
        if await self.has_categories():
            logger.debug("Categories present, skipping default seeding")
            return 0
        created = await self.create_categories(DEFAULT_CATEGORIES)
        logger.info("Seeded %d default categories", created)
        return created

    # Loans

    @abc.abstractmethod
    async def get_loans(self) -> List[loan_schemas.Loan]: ...

    @abc.abstractmethod
    async def get_loan(self, loan_id: int) -> Optional[loan_schemas.Loan]: ...

    @abc.abstractmethod
    async def create_loan(self, loan: loan_schemas.LoanCreate) -> loan_schemas.Loan: ...

    @abc.abstractmethod
    async def update_loan(self, loan_id: int, updates: Dict[str, Any]) -> Optional[loan_schemas.Loan]: ...

    @abc.abstractmethod
    async def delete_loan(self, loan_id: int) -> bool: ...

    # Budgets

    @abc.abstractmethod
    async def get_budgets(self, user_id: Optional[int] = None) -> List[budget_schemas.Budget]: ...

    @abc.abstractmethod
    async def get_budget(self, budget_id: int) -> Optional[budget_schemas.Budget]: ...

    @abc.abstractmethod
    async def create_budget(self, budget: budget_schemas.BudgetCreate) -> budget_schemas.Budget: ...

    @abc.abstractmethod
    async def update_budget(self, budget_id: int, updates: Dict[str, Any]) -> Optional[budget_schemas.Budget]: ...

    @abc.abstractmethod
    async def delete_budget(self, budget_id: int) -> bool: ...

    # Goals

    @abc.abstractmethod
    async def get_goals(self, user_id: Optional[int] = None) -> List[goal_schemas.Goal]: ...

    @abc.abstractmethod
    async def get_goal(self, goal_id: int) -> Optional[goal_schemas.Goal]: ...

    @abc.abstractmethod
    async def create_goal(self, goal: goal_schemas.GoalCreate) -> goal_schemas.Goal: ...

    @abc.abstractmethod
    async def update_goal(self, goal_id: int, updates: Dict[str, Any]) -> Optional[goal_schemas.Goal]: ...

    @abc.abstractmethod
    async def delete_goal(self, goal_id: int) -> bool: ...

    # Bank data

    @abc.abstractmethod
    async def get_bank_accounts(self, user_id: int) -> List[bank_schemas.BankAccount]: ...

    @abc.abstractmethod
    async def get_bank_account(self, bank_account_id: int) -> Optional[bank_schemas.BankAccount]: ...

    @abc.abstractmethod
    async def upsert_bank_account(
        self, user_id: int, account: bank_schemas.BankAccountData
    ) -> bank_schemas.BankAccount:
        """Insert or refresh a linked account.

        Raises BankAccountConflict when the account belongs to another user.
        """

    @abc.abstractmethod
    async def mark_bank_account_synced(
        self, bank_account_id: int, when: datetime
    ) -> Optional[bank_schemas.BankAccount]: ...

    @abc.abstractmethod
    async def add_bank_transaction(
        self,
        transaction: bank_schemas.BankTransactionCreate,
        ledger_transaction: transaction_schemas.TransactionCreate,
    ) -> Optional[bank_schemas.BankTransaction]:
        """Store a bank transaction together with its ledger copy.

        Returns None, writing nothing, when the transaction was imported before.
        """

    # Analytics

    @abc.abstractmethod
    async def get_total_income(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal: ...

    @abc.abstractmethod
    async def get_total_expenses(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        """Expense, business and loan transactions summed together."""

    @abc.abstractmethod
    async def get_total_loan_balance(self) -> Decimal:
        """Remaining amount across active loans."""

    @abc.abstractmethod
    async def get_category_breakdown(
        self,
        transaction_type: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[CategoryTotal]: ...

    async def get_net_balance(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        income = await self.get_total_income(start, end)
        expenses = await self.get_total_expenses(start, end)
        return income - expenses

    async def get_overview(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Overview:
        income = await self.get_total_income(start, end)
        expenses = await self.get_total_expenses(start, end)
        return Overview(
            total_income=income,
            total_expenses=expenses,
            net_balance=income - expenses,
            total_loan_balance=await self.get_total_loan_balance(),
        )
