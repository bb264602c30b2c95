"""Shared FastAPI dependencies."""

from datetime import datetime
from typing import Optional

from fastapi import HTTPException, Query, Request, status

from tracker.bank.gateway import PlaidGateway
from tracker.core.config import Settings
from tracker.core.schemas import to_naive_utc
from tracker.payment.gateway import StripeGateway
from tracker.storage.base import Storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_stripe(request: Request) -> StripeGateway:
    return request.app.state.stripe


def get_plaid(request: Request) -> PlaidGateway:
    plaid_gateway = request.app.state.plaid
    if plaid_gateway is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Bank integration is not configured",
        )
    return plaid_gateway


class DateRange:
    """Optional startDate/endDate query pair, normalized to naive UTC."""

    def __init__(
        self,
        start_date: Optional[datetime] = Query(None, alias="startDate", description="Inclusive lower bound"),
        end_date: Optional[datetime] = Query(None, alias="endDate", description="Inclusive upper bound"),
    ):
        self.start = to_naive_utc(start_date) if start_date else None
        self.end = to_naive_utc(end_date) if end_date else None

    @property
    def complete(self) -> bool:
        return self.start is not None and self.end is not None
