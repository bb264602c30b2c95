"""Script to seed demo data into the configured storage backend."""

from datetime import timedelta
from decimal import Decimal
import asyncio
import logging

from tracker.budget.schemas import BudgetCreate
from tracker.core.config import get_settings
from tracker.core.schemas import utcnow
from tracker.core.security import get_password_hash
from tracker.goal.schemas import GoalCreate
from tracker.loan.schemas import LoanCreate
from tracker.storage.factory import create_storage
from tracker.transaction.schemas import TransactionCreate
from tracker.user.schemas import UserCreate

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"


async def seed_data():
    """Seed a demo user with a month of transactions, a loan, a budget and a goal."""
    storage = create_storage(get_settings())
    await storage.initialize()
    try:
        await storage.seed_default_categories()

        if await storage.get_user_by_username(DEMO_USERNAME):
            logger.info("Demo user already exists, nothing to seed")
            return

        user = await storage.create_user(
            UserCreate(username=DEMO_USERNAME, password="password123", email="demo@example.com"),
            get_password_hash("password123"),
        )

        now = utcnow()
        transactions = [
            ("income", "3200.00", "Salary", "Monthly salary", 28),
            ("income", "450.00", "Freelance", "Website project", 20),
            ("expense", "82.40", "Food & Dining", "Groceries", 26),
            ("expense", "45.00", "Transportation", "Fuel", 21),
            ("expense", "120.00", "Utilities", "Electricity and water", 15),
            ("expense", "64.99", "Entertainment", "Concert tickets", 9),
            ("business", "210.00", "Office Supplies", "Printer and paper", 12),
            ("business", "380.00", "Travel", "Client visit", 5),
            ("loan", "350.00", "Loan Payment", "Car loan installment", 3),
        ]
        await storage.create_transactions([
            TransactionCreate(
                type=transaction_type,
                amount=Decimal(amount),
                category=category,
                description=description,
                date=now - timedelta(days=days_ago),
            )
            for transaction_type, amount, category, description, days_ago in transactions
        ])

        await storage.create_loan(LoanCreate(
            name="Car loan",
            total_amount=Decimal("12000.00"),
            remaining_amount=Decimal("7800.00"),
            interest_rate=Decimal("6.50"),
            monthly_payment=Decimal("350.00"),
            due_date=now + timedelta(days=27),
            status="active",
        ))

        await storage.create_budget(BudgetCreate(
            user_id=user.id,
            name="Groceries",
            budget_type="expense",
            target_amount=Decimal("400.00"),
            current_amount=Decimal("82.40"),
            period="monthly",
            start_date=now - timedelta(days=28),
            end_date=now + timedelta(days=2),
        ))

        await storage.create_goal(GoalCreate(
            user_id=user.id,
            title="Emergency fund",
            goal_type="savings",
            target_amount=Decimal("5000.00"),
            current_amount=Decimal("1250.00"),
            target_date=now + timedelta(days=180),
            priority="high",
        ))

        logger.info("Seeded demo user %s with %d transactions", user.username, len(transactions))
    finally:
        await storage.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_data())
