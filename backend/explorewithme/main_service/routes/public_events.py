"""
Public event endpoints. Both record a hit with the stats service.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination, split_list
from explorewithme.core.dates import DateTime
from explorewithme.db.session import get_db
from explorewithme.main_service.infrastructure import StatsClient, get_stats_client
from explorewithme.main_service.schemas import EventFullDto, EventShortDto, EventSort
from explorewithme.main_service.services import event_service
from explorewithme.main_service.services.event_filters import PublicEventSearchParams

router = APIRouter(prefix="/events", tags=["Public: Events"])


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


@router.get("", response_model=list[EventShortDto])
async def get_events_endpoint(
    request: Request,
    text: Optional[str] = Query(None),
    categories: Optional[list[str]] = Query(None),
    paid: Optional[bool] = Query(None),
    range_start: Optional[DateTime] = Query(None, alias="rangeStart"),
    range_end: Optional[DateTime] = Query(None, alias="rangeEnd"),
    only_available: bool = Query(False, alias="onlyAvailable"),
    sort: EventSort = Query(EventSort.EVENT_DATE),
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    """
    Search published events.

    Text matching is case-insensitive over annotation and description. Without
    rangeStart only future events are listed.
    """
    params = PublicEventSearchParams(
        text=text,
        categories=split_list(categories, "categories", int),
        paid=paid,
        range_start=range_start,
        range_end=range_end,
        only_available=only_available,
        sort=sort,
    )
    events = await event_service.get_events_public(db, stats, params, page.from_, page.size)
    await stats.record_hit(request.url.path, _client_ip(request))
    return events


@router.get("/{event_id}", response_model=EventFullDto)
async def get_event_endpoint(
    event_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    return await event_service.get_event_public(db, stats, event_id, _client_ip(request))
