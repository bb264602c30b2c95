"""Category model for the database."""

from sqlalchemy import Column, Integer, String

from tracker.core.database import Base


class Category(Base):
    """Category model for grouping transactions by name."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    type = Column(String(20), nullable=False, index=True)
    color = Column(String(7), nullable=False)  # Hex, e.g. #059669
    icon = Column(String(50), nullable=False)
