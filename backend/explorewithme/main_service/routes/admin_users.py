"""
Admin user endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination, split_list
from explorewithme.db.session import get_db
from explorewithme.main_service.schemas import NewUserRequest, UpdateUserRequest, UserDto
from explorewithme.main_service.services import user_service

router = APIRouter(prefix="/admin/users", tags=["Admin: Users"])


@router.post("", response_model=UserDto, status_code=status.HTTP_201_CREATED)
async def create_user_endpoint(
    new_user: NewUserRequest,
    db: AsyncSession = Depends(get_db),
):
    return await user_service.create_user(db, new_user)


@router.get("", response_model=list[UserDto])
async def get_users_endpoint(
    ids: Optional[list[str]] = Query(None),
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
):
    """Users ordered by id; `ids` narrows the listing when present."""
    return await user_service.get_users(db, split_list(ids, "ids", int), page.from_, page.size)


@router.patch("/{user_id}", response_model=UserDto)
async def update_user_endpoint(
    user_id: int,
    changes: UpdateUserRequest,
    db: AsyncSession = Depends(get_db),
):
    return await user_service.update_user(db, user_id, changes)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_endpoint(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    await user_service.delete_user(db, user_id)
