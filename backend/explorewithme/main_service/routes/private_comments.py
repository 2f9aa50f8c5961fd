"""
Comment endpoints for authors.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination
from explorewithme.db.session import get_db
from explorewithme.main_service.schemas import CommentDto, NewCommentDto, UpdateCommentDto
from explorewithme.main_service.services import comment_service

router = APIRouter(prefix="/users/{user_id}", tags=["Private: Comments"])


@router.post(
    "/events/{event_id}/comments",
    response_model=CommentDto,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment_endpoint(
    user_id: int,
    event_id: int,
    new_comment: NewCommentDto,
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.add_comment(db, user_id, event_id, new_comment)


@router.get("/comments", response_model=list[CommentDto])
async def get_own_comments_endpoint(
    user_id: int,
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.get_user_comments(db, user_id, page.from_, page.size)


@router.patch("/comments/{comment_id}", response_model=CommentDto)
async def update_comment_endpoint(
    user_id: int,
    comment_id: int,
    changes: UpdateCommentDto,
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.update_user_comment(db, user_id, comment_id, changes)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment_endpoint(
    user_id: int,
    comment_id: int,
    db: AsyncSession = Depends(get_db),
):
    await comment_service.delete_user_comment(db, user_id, comment_id)
