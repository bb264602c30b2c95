"""Budget endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from restapi.dependencies import get_storage
from tracker.budget import schemas
from tracker.storage.base import Storage

router = APIRouter(
    prefix="/api/budgets",
    tags=["budgets"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Budget])
async def read_budgets(
    user_id: Optional[int] = Query(None, alias="userId", description="Only budgets of this user"),
    storage: Storage = Depends(get_storage),
):
    """Get budgets with their progress and alert status."""
    return await storage.get_budgets(user_id)


@router.get("/{budget_id}", response_model=schemas.Budget)
async def read_budget(budget_id: int, storage: Storage = Depends(get_storage)):
    budget = await storage.get_budget(budget_id)
    if budget is None:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.post("", response_model=schemas.Budget, status_code=status.HTTP_201_CREATED)
async def create_budget(budget: schemas.BudgetCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_budget(budget)


@router.put("/{budget_id}", response_model=schemas.Budget)
async def update_budget(
    budget_id: int,
    budget: schemas.BudgetUpdate,
    storage: Storage = Depends(get_storage),
):
    """Update a budget; `currentAmount` is set by the client."""
    existing = await storage.get_budget(budget_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Budget not found")

    changes = budget.changes()
    start_date = changes.get("start_date", existing.start_date)
    end_date = changes.get("end_date", existing.end_date)
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="endDate must not be before startDate")

    updated = await storage.update_budget(budget_id, changes)
    if updated is None:
        raise HTTPException(status_code=404, detail="Budget not found")
    return updated


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(budget_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_budget(budget_id):
        raise HTTPException(status_code=404, detail="Budget not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
