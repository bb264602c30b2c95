"""Repository for transaction operations."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.schemas import quantize_money
from tracker.transaction.models import Transaction
from tracker.transaction.schemas import TransactionCreate


class TransactionRepository:
    """Repository for transaction operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    @staticmethod
    def _newest_first(query):
        return query.order_by(Transaction.date.desc(), Transaction.id.desc())

    async def get_all(self) -> List[Transaction]:
        """Get all transactions, newest first."""
        result = await self.session.execute(self._newest_first(select(Transaction)))
        return list(result.scalars().all())

    async def get_by_type(self, transaction_type: str) -> List[Transaction]:
        """Get transactions of one type."""
        query = select(Transaction).where(Transaction.type == transaction_type)
        result = await self.session.execute(self._newest_first(query))
        return list(result.scalars().all())

    async def get_by_date_range(self, start: datetime, end: datetime) -> List[Transaction]:
        """Get transactions dated within [start, end]."""
        query = select(Transaction).where(Transaction.date >= start, Transaction.date <= end)
        result = await self.session.execute(self._newest_first(query))
        return list(result.scalars().all())

    async def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        result = await self.session.execute(
            select(Transaction).where(Transaction.id == transaction_id)
        )
        return result.scalar_one_or_none()

    async def create(self, transaction: TransactionCreate) -> Transaction:
        """Create a new transaction."""
        db_transaction = Transaction(**transaction.model_dump())
        self.session.add(db_transaction)
        await self.session.commit()
        await self.session.refresh(db_transaction)
        return db_transaction

    async def create_many(self, transactions: Sequence[TransactionCreate]) -> List[Transaction]:
        """Insert several transactions in one commit."""
        rows = [Transaction(**transaction.model_dump()) for transaction in transactions]
        self.session.add_all(rows)
        await self.session.commit()
        for row in rows:
            await self.session.refresh(row)
        return rows

    async def update(self, transaction_id: int, updates: Dict[str, Any]) -> Optional[Transaction]:
        """Apply a partial update; returns None when the transaction is missing."""
        db_transaction = await self.get_by_id(transaction_id)
        if not db_transaction:
            return None

        for field, value in updates.items():
            setattr(db_transaction, field, value)

        await self.session.commit()
        await self.session.refresh(db_transaction)
        return db_transaction

    async def delete(self, transaction_id: int) -> bool:
        """Delete transaction by ID."""
        db_transaction = await self.get_by_id(transaction_id)
        if not db_transaction:
            return False

        await self.session.delete(db_transaction)
        await self.session.commit()
        return True

    async def sum_amount(
        self,
        types: Sequence[str],
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Decimal:
        """SUM(amount) over the given types, optionally within [start, end]."""
        query = select(func.sum(Transaction.amount)).where(Transaction.type.in_(types))
        if start and end:
            query = query.where(Transaction.date >= start, Transaction.date <= end)
        result = await self.session.execute(query)
        return quantize_money(result.scalar() or 0)

    async def category_breakdown(
        self,
        transaction_type: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """SUM(amount) GROUP BY category for one type, largest first."""
        total = func.sum(Transaction.amount).label("amount")
        query = (
            select(Transaction.category, total)
            .where(Transaction.type == transaction_type)
            .group_by(Transaction.category)
        )
        if start and end:
            query = query.where(Transaction.date >= start, Transaction.date <= end)
        query = query.order_by(total.desc(), Transaction.category.asc())

        result = await self.session.execute(query)
        return [
            {"category": category, "amount": quantize_money(amount or 0)}
            for category, amount in result.all()
        ]
