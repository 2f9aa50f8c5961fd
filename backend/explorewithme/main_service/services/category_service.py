"""
Category service. Names are unique ignoring case; a category referenced by
any event cannot be deleted.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.exceptions import AlreadyExistsError, BusinessRuleViolationError, NotFoundError
from explorewithme.core.logging import get_logger
from explorewithme.main_service.models import Category, Event
from explorewithme.main_service.schemas import CategoryDto, NewCategoryDto
from explorewithme.main_service.services.cache_service import (
    get_cached_categories, invalidate_category_cache, set_cached_categories,
)

logger = get_logger(__name__)


async def _ensure_name_free(db: AsyncSession, name: str, exclude_id: Optional[int] = None) -> None:
    query = select(Category.id).where(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    if (await db.execute(query)).first():
        logger.warning("category_name_taken", name=name)
        raise AlreadyExistsError("Category", "name", name)


async def _get_category(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if not category:
        raise NotFoundError("Category", category_id)
    return category


async def create_category(db: AsyncSession, new_category: NewCategoryDto) -> CategoryDto:
    await _ensure_name_free(db, new_category.name)

    category = Category(name=new_category.name)
    db.add(category)
    await db.flush()
    await invalidate_category_cache()

    logger.info("category_created", category_id=category.id, name=category.name)
    return CategoryDto.model_validate(category)


async def update_category(db: AsyncSession, category_id: int, changes: NewCategoryDto) -> CategoryDto:
    category = await _get_category(db, category_id)
    await _ensure_name_free(db, changes.name, exclude_id=category_id)

    category.name = changes.name
    await db.flush()
    await invalidate_category_cache()

    logger.info("category_updated", category_id=category_id, name=category.name)
    return CategoryDto.model_validate(category)


async def delete_category(db: AsyncSession, category_id: int) -> None:
    category = await _get_category(db, category_id)

    in_use = await db.execute(select(Event.id).where(Event.category_id == category_id).limit(1))
    if in_use.first():
        raise BusinessRuleViolationError(f"The category with id={category_id} is not empty")

    await db.delete(category)
    await db.flush()
    await invalidate_category_cache()
    logger.info("category_deleted", category_id=category_id)


async def get_categories(db: AsyncSession, from_: int = 0, size: int = 10) -> list[CategoryDto]:
    cached = await get_cached_categories(from_, size)
    if cached is not None:
        return [CategoryDto.model_validate(c) for c in cached]

    result = await db.execute(select(Category).order_by(Category.id.asc()).offset(from_).limit(size))
    categories = [CategoryDto.model_validate(c) for c in result.scalars().all()]

    await set_cached_categories(from_, size, [c.model_dump() for c in categories])
    return categories


async def get_category(db: AsyncSession, category_id: int) -> CategoryDto:
    return CategoryDto.model_validate(await _get_category(db, category_id))
