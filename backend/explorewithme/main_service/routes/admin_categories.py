"""
Admin category endpoints. Each change drops the cached public listing.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.db.session import get_db
from explorewithme.main_service.schemas import CategoryDto, NewCategoryDto
from explorewithme.main_service.services import category_service

router = APIRouter(prefix="/admin/categories", tags=["Admin: Categories"])


@router.post("", response_model=CategoryDto, status_code=status.HTTP_201_CREATED)
async def create_category_endpoint(
    new_category: NewCategoryDto,
    db: AsyncSession = Depends(get_db),
):
    return await category_service.create_category(db, new_category)


@router.patch("/{cat_id}", response_model=CategoryDto)
async def update_category_endpoint(
    cat_id: int,
    changes: NewCategoryDto,
    db: AsyncSession = Depends(get_db),
):
    return await category_service.update_category(db, cat_id, changes)


@router.delete("/{cat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_endpoint(
    cat_id: int,
    db: AsyncSession = Depends(get_db),
):
    await category_service.delete_category(db, cat_id)
