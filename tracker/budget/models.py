"""Budget model for the database."""

from sqlalchemy import Boolean, Column, Integer, String, DateTime, Numeric

from tracker.core.database import Base
from tracker.core.schemas import utcnow


class Budget(Base):
    """Budget model: a spending target over a period."""
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    category_id = Column(Integer, nullable=True)
    budget_type = Column(String(20), nullable=False)
    target_amount = Column(Numeric(10, 2), nullable=False)
    current_amount = Column(Numeric(10, 2), nullable=False, default=0)  # Updated by the client
    period = Column(String(20), nullable=False)  # weekly | monthly | quarterly | yearly
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    alert_threshold = Column(Numeric(3, 2), nullable=False, default=0.80)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
