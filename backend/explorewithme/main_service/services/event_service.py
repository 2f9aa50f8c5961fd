"""
Event service: search for public and admin callers, and the event lifecycle.

State machine:
  PENDING --PUBLISH_EVENT (admin)--> PUBLISHED
  PENDING | CANCELED --REJECT_EVENT (admin) / CANCEL_REVIEW (owner)--> CANCELED
  PENDING | CANCELED --SEND_TO_REVIEW (owner)--> PENDING

PUBLISHED is terminal: owners may only edit PENDING or CANCELED events and
admins cannot move an event out of PUBLISHED.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.dates import now
from explorewithme.core.exceptions import BusinessRuleViolationError, NotFoundError
from explorewithme.core.logging import get_logger
from explorewithme.core.metrics import events_created, record_state_transition
from explorewithme.main_service.infrastructure.stats_client import StatsClient
from explorewithme.main_service.mappers import to_event_full_dto, to_event_short_dto
from explorewithme.main_service.models import Category, Event, EventState, Location, User
from explorewithme.main_service.schemas import (
    AdminStateAction, EventFullDto, EventShortDto, EventSort, NewEventDto,
    UpdateEventAdminRequest, UpdateEventUserRequest, UserStateAction,
)
from explorewithme.main_service.schemas.event import UpdateEventRequest
from explorewithme.main_service.services.event_filters import (
    AdminEventSearchParams, PublicEventSearchParams, admin_conditions, public_conditions, validate_range,
)
from explorewithme.main_service.services.request_service import count_confirmed

logger = get_logger(__name__)

MIN_HOURS_BEFORE_EVENT = 2
MIN_HOURS_BEFORE_PUBLICATION_FOR_ADMIN = 1


def _ensure_event_date(event_date: datetime) -> None:
    earliest = datetime.now() + timedelta(hours=MIN_HOURS_BEFORE_EVENT)
    if event_date < earliest:
        raise BusinessRuleViolationError(
            f"Event date must be at least {MIN_HOURS_BEFORE_EVENT} hours in the future. "
            f"Value: {event_date}"
        )


async def _get_category(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if not category:
        raise NotFoundError("Category", category_id)
    return category


async def _get_owned_event(db: AsyncSession, user_id: int, event_id: int) -> Event:
    result = await db.execute(
        select(Event).where(Event.id == event_id, Event.initiator_id == user_id)
    )
    event = result.scalar_one_or_none()
    if not event:
        raise NotFoundError(
            "Event", event_id, f"Event with id={event_id} and initiatorId={user_id} was not found"
        )
    return event


def _apply_update(event: Event, changes: UpdateEventRequest, category: Optional[Category]) -> None:
    """Copy every supplied field onto the event; absent fields are untouched."""
    if changes.annotation is not None:
        event.annotation = changes.annotation
    if category is not None:
        event.category = category
    if changes.description is not None:
        event.description = changes.description
    if changes.event_date is not None:
        event.event_date = changes.event_date
    if changes.location is not None:
        event.location.lat = changes.location.lat
        event.location.lon = changes.location.lon
    if changes.paid is not None:
        event.paid = changes.paid
    if changes.participant_limit is not None:
        event.participant_limit = changes.participant_limit
    if changes.request_moderation is not None:
        event.request_moderation = changes.request_moderation
    if changes.comments_enabled is not None:
        event.comments_enabled = changes.comments_enabled
    if changes.title is not None:
        event.title = changes.title


async def _full_dto(db: AsyncSession, stats: StatsClient, event: Event) -> EventFullDto:
    confirmed = await count_confirmed(db, [event.id])
    views = await stats.get_views_for_event(event.id)
    return to_event_full_dto(event, confirmed[event.id], views)


async def _short_dtos(db: AsyncSession, stats: StatsClient, events: list[Event]) -> list[EventShortDto]:
    ids = [e.id for e in events]
    confirmed = await count_confirmed(db, ids)
    views = await stats.get_views(ids)
    return [to_event_short_dto(e, confirmed[e.id], views[e.id]) for e in events]


# -----------------------------------------------------------------------------
# Public
# -----------------------------------------------------------------------------

async def get_events_public(
    db: AsyncSession,
    stats: StatsClient,
    params: PublicEventSearchParams,
    from_: int = 0,
    size: int = 10,
) -> list[EventShortDto]:
    """
    Search published events.

    Without rangeStart only events from now on are returned. VIEWS sorting
    needs the view count of every match, so matches are ranked in memory
    after one batch stats call; EVENT_DATE sorting is paginated in SQL.
    """
    validate_range(params.range_start, params.range_end)
    logger.debug("public_event_search", params=params, from_=from_, size=size)

    query = select(Event).where(*public_conditions(params, datetime.now()))

    if params.sort == EventSort.VIEWS:
        events = list((await db.execute(query)).scalars().all())
        views = await stats.get_views(e.id for e in events)
        events.sort(key=lambda e: (-views[e.id], e.id))
        page = events[from_:from_ + size]
        confirmed = await count_confirmed(db, [e.id for e in page])
        result = [to_event_short_dto(e, confirmed[e.id], views[e.id]) for e in page]
    else:
        query = query.order_by(Event.event_date.asc(), Event.id.asc()).offset(from_).limit(size)
        page = list((await db.execute(query)).scalars().all())
        result = await _short_dtos(db, stats, page)

    logger.debug("public_event_search_completed", found=len(result))
    return result


async def get_event_public(
    db: AsyncSession,
    stats: StatsClient,
    event_id: int,
    ip_address: Optional[str],
) -> EventFullDto:
    event = await db.get(Event, event_id)
    if not event or event.state != EventState.PUBLISHED:
        raise NotFoundError("Event", event_id, f"Event with id={event_id} was not found or is not published")

    await stats.record_hit(f"/events/{event_id}", ip_address)
    return await _full_dto(db, stats, event)


# -----------------------------------------------------------------------------
# Admin
# -----------------------------------------------------------------------------

async def get_events_admin(
    db: AsyncSession,
    stats: StatsClient,
    params: AdminEventSearchParams,
    from_: int = 0,
    size: int = 10,
) -> list[EventFullDto]:
    validate_range(params.range_start, params.range_end)
    logger.debug("admin_event_search", params=params, from_=from_, size=size)

    query = (
        select(Event)
        .where(*admin_conditions(params))
        .order_by(Event.id.asc())
        .offset(from_)
        .limit(size)
    )
    events = list((await db.execute(query)).scalars().all())

    ids = [e.id for e in events]
    confirmed = await count_confirmed(db, ids)
    views = await stats.get_views(ids)
    return [to_event_full_dto(e, confirmed[e.id], views[e.id]) for e in events]


async def moderate_event_by_admin(
    db: AsyncSession,
    stats: StatsClient,
    event_id: int,
    changes: UpdateEventAdminRequest,
) -> EventFullDto:
    """
    Partial update plus an optional PUBLISH_EVENT / REJECT_EVENT action.

    Every precondition is checked before the event is touched.
    """
    logger.info("admin_event_moderation", event_id=event_id, state_action=changes.state_action)

    event = await db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event", event_id)

    if changes.event_date is not None:
        _ensure_event_date(changes.event_date)

    category = await _get_category(db, changes.category) if changes.category is not None else None

    action = changes.state_action
    if action == AdminStateAction.PUBLISH_EVENT:
        if event.state != EventState.PENDING:
            record_state_transition(action.value, success=False)
            raise BusinessRuleViolationError(
                f"Cannot publish the event because it's not in the PENDING state. "
                f"Current state: {event.state.value}"
            )
        event_date = changes.event_date or event.event_date
        if event_date < datetime.now() + timedelta(hours=MIN_HOURS_BEFORE_PUBLICATION_FOR_ADMIN):
            record_state_transition(action.value, success=False)
            raise BusinessRuleViolationError(
                f"Cannot publish the event. Event date must be at least "
                f"{MIN_HOURS_BEFORE_PUBLICATION_FOR_ADMIN} hour(s) in the future. Event date: {event_date}"
            )
    elif action == AdminStateAction.REJECT_EVENT and event.state == EventState.PUBLISHED:
        record_state_transition(action.value, success=False)
        raise BusinessRuleViolationError(
            "Cannot reject the event because it has already been published"
        )

    _apply_update(event, changes, category)

    if action == AdminStateAction.PUBLISH_EVENT:
        event.state = EventState.PUBLISHED
        event.published_on = now()
    elif action == AdminStateAction.REJECT_EVENT:
        event.state = EventState.CANCELED
    if action is not None:
        record_state_transition(action.value, success=True)

    await db.flush()
    logger.info("admin_event_moderated", event_id=event_id, state=event.state.value)
    return await _full_dto(db, stats, event)


# -----------------------------------------------------------------------------
# Private (initiator)
# -----------------------------------------------------------------------------

async def get_events_by_owner(
    db: AsyncSession,
    stats: StatsClient,
    user_id: int,
    from_: int = 0,
    size: int = 10,
) -> list[EventShortDto]:
    """Events of an initiator, latest event date first. Unknown users have none."""
    if not await db.get(User, user_id):
        return []

    result = await db.execute(
        select(Event)
        .where(Event.initiator_id == user_id)
        .order_by(Event.event_date.desc(), Event.id.desc())
        .offset(from_)
        .limit(size)
    )
    return await _short_dtos(db, stats, list(result.scalars().all()))


async def get_event_private(db: AsyncSession, stats: StatsClient, user_id: int, event_id: int) -> EventFullDto:
    event = await _get_owned_event(db, user_id, event_id)
    return await _full_dto(db, stats, event)


async def add_event(db: AsyncSession, user_id: int, new_event: NewEventDto) -> EventFullDto:
    """Create a PENDING event owned by user_id."""
    _ensure_event_date(new_event.event_date)

    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    category = await _get_category(db, new_event.category)

    event = Event(
        annotation=new_event.annotation,
        description=new_event.description,
        title=new_event.title,
        event_date=new_event.event_date,
        created_on=now(),
        paid=new_event.paid,
        participant_limit=new_event.participant_limit,
        request_moderation=new_event.request_moderation,
        comments_enabled=new_event.comments_enabled,
        state=EventState.PENDING,
        category=category,
        initiator=user,
        location=Location(lat=new_event.location.lat, lon=new_event.location.lon),
    )
    db.add(event)
    await db.flush()

    events_created.inc()
    logger.info("event_created", event_id=event.id, user_id=user_id, title=event.title)
    return to_event_full_dto(event)


async def update_event_by_owner(
    db: AsyncSession,
    stats: StatsClient,
    user_id: int,
    event_id: int,
    changes: UpdateEventUserRequest,
) -> EventFullDto:
    logger.info("owner_event_update", user_id=user_id, event_id=event_id, state_action=changes.state_action)

    event = await _get_owned_event(db, user_id, event_id)

    if event.state not in (EventState.PENDING, EventState.CANCELED):
        raise BusinessRuleViolationError(
            f"Only pending or canceled events can be changed. Current state: {event.state.value}"
        )

    if changes.event_date is not None:
        _ensure_event_date(changes.event_date)

    category = await _get_category(db, changes.category) if changes.category is not None else None

    _apply_update(event, changes, category)

    if changes.state_action == UserStateAction.SEND_TO_REVIEW:
        event.state = EventState.PENDING
    elif changes.state_action == UserStateAction.CANCEL_REVIEW:
        event.state = EventState.CANCELED
    if changes.state_action is not None:
        record_state_transition(changes.state_action.value, success=True)

    await db.flush()
    logger.info("owner_event_updated", user_id=user_id, event_id=event_id, state=event.state.value)
    return await _full_dto(db, stats, event)
