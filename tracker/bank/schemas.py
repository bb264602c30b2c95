"""Pydantic schemas for bank integration data."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, Optional
from pydantic import AfterValidator, BaseModel, Field

from tracker.core.schemas import CamelModel, Money, UtcDateTime, quantize_money

Balance = Annotated[Decimal, Field(max_digits=12, decimal_places=2), AfterValidator(quantize_money)]


class BankAccountData(CamelModel):
    """Account fields as reported by the aggregator."""
    account_id: str
    name: str
    official_name: Optional[str] = None
    type: str
    subtype: Optional[str] = None
    mask: Optional[str] = None
    current_balance: Optional[Balance] = None
    available_balance: Optional[Balance] = None
    iso_currency_code: str = "USD"
    institution_name: Optional[str] = None


class BankAccount(BankAccountData):
    """Schema for bank account response."""
    id: int
    user_id: int
    last_synced_at: Optional[datetime] = None
    created_at: datetime


class BankTransactionData(CamelModel):
    """Transaction fields as reported by the aggregator.

    Amounts follow the aggregator's sign: positive is money leaving the
    account, negative is money coming in.
    """
    transaction_id: str
    amount: Money
    name: str
    merchant_name: Optional[str] = None
    category: str = "Other Expenses"
    date: UtcDateTime
    pending: bool = False


class BankTransactionCreate(BankTransactionData):
    bank_account_id: int


class BankTransaction(BankTransactionCreate):
    """Schema for bank transaction response."""
    id: int
    created_at: datetime


class LinkToken(BaseModel):
    """Link token handed to the aggregator widget, keyed the way the widget expects."""
    link_token: str


class PublicTokenExchange(CamelModel):
    public_token: str = Field(min_length=1)
    metadata: Optional[Dict[str, Any]] = None


class SyncRequest(CamelModel):
    account_id: int


class SyncResult(CamelModel):
    synced: int
    skipped: int
