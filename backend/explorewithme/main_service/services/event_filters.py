"""
Filter specifications for event search and their translation to SQL.

An absent filter (None or an empty list) adds no constraint; it never turns
into "match nothing".
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_, select

from explorewithme.core.exceptions import InvalidArgumentError
from explorewithme.main_service.models import Event, EventState, ParticipationRequest, RequestStatus
from explorewithme.main_service.schemas import EventSort


@dataclass
class PublicEventSearchParams:
    text: Optional[str] = None
    categories: Optional[list[int]] = None
    paid: Optional[bool] = None
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None
    only_available: bool = False
    sort: EventSort = EventSort.EVENT_DATE


@dataclass
class AdminEventSearchParams:
    users: Optional[list[int]] = None
    states: Optional[list[EventState]] = None
    categories: Optional[list[int]] = None
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None


def validate_range(range_start: Optional[datetime], range_end: Optional[datetime]) -> None:
    if range_start is not None and range_end is not None and range_start > range_end:
        raise InvalidArgumentError("rangeStart cannot be after rangeEnd", field="rangeStart")


def confirmed_requests_subquery():
    """Live CONFIRMED count for the Event row of the enclosing query."""
    return (
        select(func.count(ParticipationRequest.id))
        .where(
            ParticipationRequest.event_id == Event.id,
            ParticipationRequest.status == RequestStatus.CONFIRMED,
        )
        .correlate(Event)
        .scalar_subquery()
    )


def public_conditions(params: PublicEventSearchParams, current_time: datetime) -> list:
    # Public callers only ever see published, upcoming events
    conditions = [
        Event.state == EventState.PUBLISHED,
        Event.event_date >= (params.range_start or current_time),
    ]

    if params.text and params.text.strip():
        text = params.text.strip().lower()
        conditions.append(or_(
            func.lower(Event.annotation).contains(text, autoescape=True),
            func.lower(Event.description).contains(text, autoescape=True),
        ))
    if params.categories:
        conditions.append(Event.category_id.in_(params.categories))
    if params.paid is not None:
        conditions.append(Event.paid == params.paid)
    if params.range_end is not None:
        conditions.append(Event.event_date <= params.range_end)
    if params.only_available:
        conditions.append(or_(
            Event.participant_limit == 0,
            confirmed_requests_subquery() < Event.participant_limit,
        ))
    return conditions


def admin_conditions(params: AdminEventSearchParams) -> list:
    conditions = []

    if params.users:
        conditions.append(Event.initiator_id.in_(params.users))
    if params.states:
        conditions.append(Event.state.in_(params.states))
    if params.categories:
        conditions.append(Event.category_id.in_(params.categories))
    if params.range_start is not None:
        conditions.append(Event.event_date >= params.range_start)
    if params.range_end is not None:
        conditions.append(Event.event_date <= params.range_end)
    return conditions
