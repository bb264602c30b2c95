"""Loan endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from restapi.dependencies import get_storage
from tracker.loan import schemas
from tracker.storage.base import Storage

router = APIRouter(
    prefix="/api/loans",
    tags=["loans"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Loan])
async def read_loans(storage: Storage = Depends(get_storage)):
    """Get all loans, most recent first, each with its payoff progress."""
    return await storage.get_loans()


@router.get("/{loan_id}", response_model=schemas.Loan)
async def read_loan(loan_id: int, storage: Storage = Depends(get_storage)):
    """Get a specific loan by ID."""
    loan = await storage.get_loan(loan_id)
    if loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    return loan


@router.post("", response_model=schemas.Loan, status_code=status.HTTP_201_CREATED)
async def create_loan(loan: schemas.LoanCreate, storage: Storage = Depends(get_storage)):
    """Create a new loan."""
    return await storage.create_loan(loan)


@router.put("/{loan_id}", response_model=schemas.Loan)
async def update_loan(
    loan_id: int,
    loan: schemas.LoanUpdate,
    storage: Storage = Depends(get_storage),
):
    """Update a loan."""
    existing = await storage.get_loan(loan_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Loan not found")

    changes = loan.changes()
    total_amount = changes.get("total_amount", existing.total_amount)
    remaining_amount = changes.get("remaining_amount", existing.remaining_amount)
    if remaining_amount < 0 or remaining_amount > total_amount:
        raise HTTPException(status_code=400, detail="remainingAmount must be between 0 and totalAmount")

    updated = await storage.update_loan(loan_id, changes)
    if updated is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    return updated


@router.delete("/{loan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_loan(loan_id: int, storage: Storage = Depends(get_storage)):
    """Delete a loan."""
    if not await storage.delete_loan(loan_id):
        raise HTTPException(status_code=404, detail="Loan not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
