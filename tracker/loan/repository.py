"""Repository for loan operations."""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.schemas import quantize_money
from tracker.loan.models import Loan
from tracker.loan.schemas import LoanCreate


class LoanRepository:
    """Repository for loan operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_all(self) -> List[Loan]:
        """Get all loans, most recently created first."""
        result = await self.session.execute(
            select(Loan).order_by(Loan.created_at.desc(), Loan.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, loan_id: int) -> Optional[Loan]:
        result = await self.session.execute(select(Loan).where(Loan.id == loan_id))
        return result.scalar_one_or_none()

    async def create(self, loan: LoanCreate) -> Loan:
        db_loan = Loan(**loan.model_dump())
        self.session.add(db_loan)
        await self.session.commit()
        await self.session.refresh(db_loan)
        return db_loan

    async def update(self, loan_id: int, updates: Dict[str, Any]) -> Optional[Loan]:
        db_loan = await self.get_by_id(loan_id)
        if not db_loan:
            return None

        for field, value in updates.items():
            setattr(db_loan, field, value)

        await self.session.commit()
        await self.session.refresh(db_loan)
        return db_loan

    async def delete(self, loan_id: int) -> bool:
        db_loan = await self.get_by_id(loan_id)
        if not db_loan:
            return False

        await self.session.delete(db_loan)
        await self.session.commit()
        return True

    async def total_active_remaining(self) -> Decimal:
        """SUM(remaining_amount) over active loans."""
        result = await self.session.execute(
            select(func.sum(Loan.remaining_amount)).where(Loan.status == "active")
        )
        return quantize_money(result.scalar() or 0)
