"""Goal endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from restapi.dependencies import get_storage
from tracker.goal import schemas
from tracker.storage.base import Storage

router = APIRouter(
    prefix="/api/goals",
    tags=["goals"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Goal])
async def read_goals(
    user_id: Optional[int] = Query(None, alias="userId", description="Only goals of this user"),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_goals(user_id)


@router.get("/{goal_id}", response_model=schemas.Goal)
async def read_goal(goal_id: int, storage: Storage = Depends(get_storage)):
    goal = await storage.get_goal(goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.post("", response_model=schemas.Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(goal: schemas.GoalCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_goal(goal)


@router.put("/{goal_id}", response_model=schemas.Goal)
async def update_goal(
    goal_id: int,
    goal: schemas.GoalUpdate,
    storage: Storage = Depends(get_storage),
):
    updated = await storage.update_goal(goal_id, goal.changes())
    if updated is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return updated


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_goal(goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
