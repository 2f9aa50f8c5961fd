"""
Seed helpers shared by the test modules.
"""

from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.dates import DATE_TIME_FORMAT, now
from explorewithme.main_service.models import Category, Event, EventState, Location, User


def future(hours: float = 24) -> datetime:
    return now() + timedelta(hours=hours)


def fmt(value: datetime) -> str:
    return value.strftime(DATE_TIME_FORMAT)


def event_payload(category_id: int, **overrides) -> dict:
    """A valid NewEventDto body; overrides use wire (camelCase) names."""
    payload = {
        "annotation": "An evening of live jazz in the old town square",
        "category": category_id,
        "description": "Local bands play classic and modern jazz until midnight, free entry.",
        "eventDate": fmt(future(72)),
        "location": {"lat": 55.75, "lon": 37.61},
        "paid": False,
        "participantLimit": 0,
        "requestModeration": True,
        "title": "Jazz in the square",
    }
    payload.update(overrides)
    return payload


async def make_user(db: AsyncSession, name: str, email: str) -> User:
    user = User(name=name, email=email)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_category(db: AsyncSession, name: str) -> Category:
    category = Category(name=name)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


async def make_event(
    db: AsyncSession,
    initiator: User,
    category: Category,
    state: EventState = EventState.PUBLISHED,
    event_date: datetime = None,
    participant_limit: int = 0,
    request_moderation: bool = True,
    comments_enabled: bool = True,
    paid: bool = False,
    annotation: str = "An evening of live jazz in the old town square",
    description: str = "Local bands play classic and modern jazz until midnight, free entry.",
    title: str = "Jazz in the square",
) -> Event:
    """Insert an event directly, bypassing the moderation flow."""
    event = Event(
        annotation=annotation,
        description=description,
        title=title,
        event_date=event_date or future(72),
        created_on=now(),
        published_on=now() if state == EventState.PUBLISHED else None,
        paid=paid,
        participant_limit=participant_limit,
        request_moderation=request_moderation,
        comments_enabled=comments_enabled,
        state=state,
        category_id=category.id,
        initiator_id=initiator.id,
        location=Location(lat=55.75, lon=37.61),
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event
