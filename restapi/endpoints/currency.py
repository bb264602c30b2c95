"""Currency endpoints for the API."""

from typing import List
from fastapi import APIRouter

from tracker.currency import schemas
from tracker.currency.currencies import CURRENCIES

router = APIRouter(prefix="/api/currencies", tags=["currencies"])


@router.get("", response_model=List[schemas.Currency])
async def read_currencies():
    """Get the currencies amounts can be displayed in."""
    return CURRENCIES
