"""Bank account and bank transaction models for the database."""

from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from tracker.core.database import Base
from tracker.core.schemas import utcnow


class BankAccount(Base):
    """Mirror of an account held at a linked institution."""
    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    account_id = Column(String(100), unique=True, nullable=False)  # Aggregator account id
    name = Column(String(100), nullable=False)
    official_name = Column(String(255), nullable=True)
    type = Column(String(30), nullable=False)
    subtype = Column(String(30), nullable=True)
    mask = Column(String(10), nullable=True)
    current_balance = Column(Numeric(12, 2), nullable=True)
    available_balance = Column(Numeric(12, 2), nullable=True)
    iso_currency_code = Column(String(3), nullable=False, default="USD")
    institution_name = Column(String(100), nullable=True)
    last_synced_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    transactions = relationship("BankTransaction", back_populates="bank_account")


class BankTransaction(Base):
    """Mirror of a transaction reported by the aggregator."""
    __tablename__ = "bank_transactions"

    id = Column(Integer, primary_key=True, index=True)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    transaction_id = Column(String(100), unique=True, nullable=False)  # Aggregator transaction id
    amount = Column(Numeric(10, 2), nullable=False)
    name = Column(String(255), nullable=False)
    merchant_name = Column(String(255), nullable=True)
    category = Column(String(100), nullable=False)
    date = Column(DateTime, nullable=False)
    pending = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    bank_account = relationship("BankAccount", back_populates="transactions")
