"""
Participation request endpoints for the requesting user.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.db.session import get_db
from explorewithme.main_service.schemas import ParticipationRequestDto
from explorewithme.main_service.services import request_service

router = APIRouter(prefix="/users/{user_id}/requests", tags=["Private: Requests"])


@router.get("", response_model=list[ParticipationRequestDto])
async def get_requests_endpoint(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await request_service.get_requests(db, user_id)


@router.post("", response_model=ParticipationRequestDto, status_code=status.HTTP_201_CREATED)
async def create_request_endpoint(
    user_id: int,
    event_id: int = Query(..., alias="eventId", gt=0),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.create_request(db, user_id, event_id)


@router.patch("/{request_id}/cancel", response_model=ParticipationRequestDto)
async def cancel_request_endpoint(
    user_id: int,
    request_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await request_service.cancel_request(db, user_id, request_id)
