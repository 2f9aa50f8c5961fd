"""
Public category endpoints. The listing is served from Redis when cached.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination
from explorewithme.db.session import get_db
from explorewithme.main_service.schemas import CategoryDto
from explorewithme.main_service.services import category_service

router = APIRouter(prefix="/categories", tags=["Public: Categories"])


@router.get("", response_model=list[CategoryDto])
async def get_categories_endpoint(
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.get_categories(db, page.from_, page.size)


@router.get("/{cat_id}", response_model=CategoryDto)
async def get_category_endpoint(
    cat_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await category_service.get_category(db, cat_id)
