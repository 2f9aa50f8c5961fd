"""
Initiator endpoints: the user's own events and the requests made for them.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination
from explorewithme.db.session import get_db
from explorewithme.main_service.infrastructure import StatsClient, get_stats_client
from explorewithme.main_service.schemas import (
    EventFullDto, EventRequestStatusUpdateRequest, EventRequestStatusUpdateResult, EventShortDto,
    NewEventDto, ParticipationRequestDto, UpdateEventUserRequest,
)
from explorewithme.main_service.services import event_service, request_service

router = APIRouter(prefix="/users/{user_id}/events", tags=["Private: Events"])


@router.get("", response_model=list[EventShortDto])
async def get_own_events_endpoint(
    user_id: int,
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    return await event_service.get_events_by_owner(db, stats, user_id, page.from_, page.size)


@router.post("", response_model=EventFullDto, status_code=status.HTTP_201_CREATED)
async def add_event_endpoint(
    user_id: int,
    new_event: NewEventDto,
    db: AsyncSession = Depends(get_db),
):
    """Create an event; it waits in PENDING until an admin publishes it."""
    return await event_service.add_event(db, user_id, new_event)


@router.get("/{event_id}", response_model=EventFullDto)
async def get_own_event_endpoint(
    user_id: int,
    event_id: int,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    return await event_service.get_event_private(db, stats, user_id, event_id)


@router.patch("/{event_id}", response_model=EventFullDto)
async def update_own_event_endpoint(
    user_id: int,
    event_id: int,
    changes: UpdateEventUserRequest,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    return await event_service.update_event_by_owner(db, stats, user_id, event_id, changes)


@router.get("/{event_id}/requests", response_model=list[ParticipationRequestDto])
async def get_event_requests_endpoint(
    user_id: int,
    event_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await request_service.get_event_requests(db, user_id, event_id)


@router.patch("/{event_id}/requests", response_model=EventRequestStatusUpdateResult)
async def update_requests_status_endpoint(
    user_id: int,
    event_id: int,
    update_request: EventRequestStatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Confirm or reject pending requests in one batch."""
    return await request_service.update_requests_status(db, user_id, event_id, update_request)
