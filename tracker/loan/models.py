"""Loan model for the database."""

from sqlalchemy import Column, Integer, String, DateTime, Numeric

from tracker.core.database import Base
from tracker.core.schemas import utcnow


class Loan(Base):
    """Loan model for tracking payoff of a borrowed amount."""
    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    remaining_amount = Column(Numeric(10, 2), nullable=False)
    interest_rate = Column(Numeric(5, 2), nullable=True)
    monthly_payment = Column(Numeric(10, 2), nullable=True)
    due_date = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active | paid | overdue
    created_at = Column(DateTime, nullable=False, default=utcnow)
