"""Transaction endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from restapi.dependencies import DateRange, get_storage
from tracker.storage.base import Storage
from tracker.transaction import schemas

router = APIRouter(
    prefix="/api/transactions",
    tags=["transactions"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Transaction])
async def read_transactions(
    type: Optional[schemas.TransactionType] = Query(None, description="Only transactions of this type"),
    dates: DateRange = Depends(),
    storage: Storage = Depends(get_storage),
):
    """
    Get transactions, newest first.

    Filters by `type` when given; otherwise by `startDate`..`endDate` when
    both bounds are given.
    """
    if type:
        return await storage.get_transactions_by_type(type)
    if dates.complete:
        return await storage.get_transactions_by_date_range(dates.start, dates.end)
    return await storage.get_transactions()


@router.post("", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction: schemas.TransactionCreate,
    storage: Storage = Depends(get_storage),
):
    """Create a new transaction."""
    return await storage.create_transaction(transaction)


@router.get("/{transaction_id}", response_model=schemas.Transaction)
async def read_transaction(
    transaction_id: int,
    storage: Storage = Depends(get_storage),
):
    """Get a specific transaction by ID."""
    transaction = await storage.get_transaction(transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.put("/{transaction_id}", response_model=schemas.Transaction)
async def update_transaction(
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    storage: Storage = Depends(get_storage),
):
    """Update the fields present in the body."""
    updated = await storage.update_transaction(transaction_id, transaction.changes())
    if updated is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return updated


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: int,
    storage: Storage = Depends(get_storage),
):
    """Delete a transaction."""
    if not await storage.delete_transaction(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
