"""Goal model for the database."""

from sqlalchemy import Boolean, Column, Integer, String, DateTime, Numeric

from tracker.core.database import Base
from tracker.core.schemas import utcnow


class Goal(Base):
    """Savings goal with an optional monthly contribution."""
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    title = Column(String(100), nullable=False)
    goal_type = Column(String(30), nullable=False)
    target_amount = Column(Numeric(10, 2), nullable=False)
    current_amount = Column(Numeric(10, 2), nullable=False, default=0)
    target_date = Column(DateTime, nullable=True)
    priority = Column(String(10), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="active")
    auto_contribute = Column(Boolean, nullable=False, default=False)
    monthly_contribution = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
