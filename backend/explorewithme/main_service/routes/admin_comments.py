"""
Admin comment moderation: soft delete and restore.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.db.session import get_db
from explorewithme.main_service.schemas import CommentDto
from explorewithme.main_service.services import comment_service

router = APIRouter(prefix="/admin/comments", tags=["Admin: Comments"])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment_endpoint(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
):
    await comment_service.delete_comment_by_admin(db, comment_id)


@router.patch("/{comment_id}/restore", response_model=CommentDto)
async def restore_comment_endpoint(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.restore_comment_by_admin(db, comment_id)
