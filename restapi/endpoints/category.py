"""Category endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from restapi.dependencies import get_storage
from tracker.category import schemas
from tracker.storage.base import Storage
from tracker.transaction.schemas import TransactionType

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.Category])
async def read_categories(
    type: Optional[TransactionType] = Query(None, description="Only categories of this type"),
    storage: Storage = Depends(get_storage),
):
    """Get all categories, optionally of one type."""
    if type:
        return await storage.get_categories_by_type(type)
    return await storage.get_categories()


@router.post("", response_model=schemas.Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: schemas.CategoryCreate,
    storage: Storage = Depends(get_storage),
):
    """Create a new category."""
    if await storage.get_category_by_name(category.name):
        raise HTTPException(
            status_code=400,
            detail="Category with this name already exists"
        )
    return await storage.create_category(category)


@router.put("/{category_id}", response_model=schemas.Category)
async def update_category(
    category_id: int,
    category: schemas.CategoryUpdate,
    storage: Storage = Depends(get_storage),
):
    """Update a category."""
    if category.name is not None:
        existing = await storage.get_category_by_name(category.name)
        if existing and existing.id != category_id:
            raise HTTPException(
                status_code=400,
                detail="Category name is already taken by another category"
            )

    updated = await storage.update_category(category_id, category.changes())
    if updated is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return updated


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    storage: Storage = Depends(get_storage),
):
    """Delete a category. Transactions keep their category name."""
    if not await storage.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
