"""Transaction model for the database."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric

from tracker.core.database import Base
from tracker.core.schemas import utcnow


class Transaction(Base):
    """Transaction model for income, expense, business and loan records."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False, index=True)  # income | expense | business | loan
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False)  # Category.name, not an FK
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
