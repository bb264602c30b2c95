"""User model for the database."""

from sqlalchemy import Column, Integer, String, DateTime

from tracker.core.database import Base
from tracker.core.schemas import utcnow


class User(Base):
    """User model with subscription and bank-link state."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # Hashed password
    email = Column(String(255), nullable=True)
    subscription_status = Column(String(20), nullable=False, default="free")
    trial_started_at = Column(DateTime, nullable=True)
    stripe_customer_id = Column(String(255), nullable=True)
    stripe_subscription_id = Column(String(255), nullable=True)
    subscription_expires_at = Column(DateTime, nullable=True)
    plaid_access_token = Column(String(255), nullable=True)
    plaid_item_id = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
