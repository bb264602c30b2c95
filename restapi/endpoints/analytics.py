"""Analytics endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from restapi.dependencies import DateRange, get_settings, get_storage
from tracker.analytics import schemas
from tracker.core.config import Settings
from tracker.currency.currencies import format_amount, get_currency
from tracker.storage.base import Storage
from tracker.transaction.schemas import TransactionType

router = APIRouter(
    prefix="/api/analytics",
    tags=["analytics"],
)


@router.get("/overview", response_model=schemas.Overview, response_model_exclude_none=True)
async def get_overview(
    dates: DateRange = Depends(),
    currency: Optional[str] = Query(
        None, min_length=3, max_length=3, description="ISO code to add formatted display amounts"
    ),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """
    Get dashboard totals.

    Returns:
    - Total income
    - Total expenses (expense, business and loan transactions)
    - Net balance (income minus expenses)
    - Remaining balance of active loans

    Income and expenses are limited to `startDate`..`endDate` when both are
    given. With `currency`, the same amounts are also returned formatted for
    display.
    """
    if dates.complete:
        overview = await storage.get_overview(dates.start, dates.end)
    else:
        overview = await storage.get_overview()

    if currency:
        display_currency = get_currency(currency, settings.DEFAULT_CURRENCY)
        amounts = overview.model_dump(by_alias=True, exclude={"formatted"})
        overview.formatted = {
            name: format_amount(value, display_currency) for name, value in amounts.items()
        }
    return overview


@router.get("/category-breakdown", response_model=List[schemas.CategoryTotal])
async def get_category_breakdown(
    type: TransactionType = Query("expense", description="Transaction type to break down"),
    dates: DateRange = Depends(),
    storage: Storage = Depends(get_storage),
):
    """Get totals per category for one transaction type, largest first."""
    if dates.complete:
        return await storage.get_category_breakdown(type, dates.start, dates.end)
    return await storage.get_category_breakdown(type)
