"""
Admin event search and moderation.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination, split_list
from explorewithme.core.dates import DateTime
from explorewithme.db.session import get_db
from explorewithme.main_service.infrastructure import StatsClient, get_stats_client
from explorewithme.main_service.models import EventState
from explorewithme.main_service.schemas import EventFullDto, UpdateEventAdminRequest
from explorewithme.main_service.services import event_service
from explorewithme.main_service.services.event_filters import AdminEventSearchParams

router = APIRouter(prefix="/admin/events", tags=["Admin: Events"])


@router.get("", response_model=list[EventFullDto])
async def get_events_admin_endpoint(
    users: Optional[list[str]] = Query(None),
    states: Optional[list[str]] = Query(None),
    categories: Optional[list[str]] = Query(None),
    range_start: Optional[DateTime] = Query(None, alias="rangeStart"),
    range_end: Optional[DateTime] = Query(None, alias="rangeEnd"),
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    params = AdminEventSearchParams(
        users=split_list(users, "users", int),
        states=split_list(states, "states", EventState),
        categories=split_list(categories, "categories", int),
        range_start=range_start,
        range_end=range_end,
    )
    return await event_service.get_events_admin(db, stats, params, page.from_, page.size)


@router.patch("/{event_id}", response_model=EventFullDto)
async def moderate_event_endpoint(
    event_id: int,
    changes: UpdateEventAdminRequest,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    """Edit an event and optionally publish or reject it."""
    return await event_service.moderate_event_by_admin(db, stats, event_id, changes)
