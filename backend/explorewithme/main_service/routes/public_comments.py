"""
Public comment listing for an event.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination
from explorewithme.db.session import get_db
from explorewithme.main_service.schemas import CommentDto
from explorewithme.main_service.services import comment_service

router = APIRouter(prefix="/events/{event_id}/comments", tags=["Public: Comments"])


@router.get("", response_model=list[CommentDto])
async def get_event_comments_endpoint(
    event_id: int,
    sort: str = Query("createdOn,DESC", pattern=r"^createdOn,(ASC|DESC)$"),
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.get_comments_for_event(db, event_id, page.from_, page.size, sort)
