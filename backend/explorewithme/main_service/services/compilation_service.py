"""
Compilation service. A compilation is created and updated as a whole: a
supplied event list replaces the previous set. Titles are unique ignoring
case and surrounding whitespace.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.exceptions import AlreadyExistsError, NotFoundError
from explorewithme.core.logging import get_logger
from explorewithme.main_service.infrastructure.stats_client import StatsClient
from explorewithme.main_service.mappers import to_compilation_dto
from explorewithme.main_service.models import Compilation, Event
from explorewithme.main_service.schemas import CompilationDto, NewCompilationDto, UpdateCompilationRequest
from explorewithme.main_service.services.request_service import count_confirmed

logger = get_logger(__name__)


async def _ensure_title_free(db: AsyncSession, title: str, exclude_id: Optional[int] = None) -> None:
    normalized = title.strip().lower()
    query = select(Compilation.id).where(func.lower(func.trim(Compilation.title)) == normalized)
    if exclude_id is not None:
        query = query.where(Compilation.id != exclude_id)
    if (await db.execute(query)).first():
        raise AlreadyExistsError("Compilation", "title", title.strip())


async def _load_events(db: AsyncSession, event_ids: list[int]) -> list[Event]:
    ids = list(dict.fromkeys(event_ids))
    if not ids:
        return []

    result = await db.execute(select(Event).where(Event.id.in_(ids)).order_by(Event.id.asc()))
    events = list(result.scalars().all())

    missing = sorted(set(ids) - {e.id for e in events})
    if missing:
        raise NotFoundError("Event", missing, f"Events {missing} were not found")
    return events


async def _get_compilation(db: AsyncSession, compilation_id: int) -> Compilation:
    compilation = await db.get(Compilation, compilation_id)
    if not compilation:
        raise NotFoundError("Compilation", compilation_id)
    return compilation


async def _to_dtos(db: AsyncSession, stats: StatsClient, compilations: list[Compilation]) -> list[CompilationDto]:
    event_ids = list(dict.fromkeys(e.id for c in compilations for e in c.events))
    confirmed = await count_confirmed(db, event_ids)
    views = await stats.get_views(event_ids)
    return [to_compilation_dto(c, confirmed, views) for c in compilations]


async def save_compilation(db: AsyncSession, stats: StatsClient, new_compilation: NewCompilationDto) -> CompilationDto:
    await _ensure_title_free(db, new_compilation.title)
    events = await _load_events(db, new_compilation.events)

    compilation = Compilation(
        title=new_compilation.title.strip(),
        pinned=new_compilation.pinned,
        events=events,
    )
    db.add(compilation)
    await db.flush()

    logger.info("compilation_created", compilation_id=compilation.id, events=len(events))
    return (await _to_dtos(db, stats, [compilation]))[0]


async def update_compilation(
    db: AsyncSession,
    stats: StatsClient,
    compilation_id: int,
    changes: UpdateCompilationRequest,
) -> CompilationDto:
    compilation = await _get_compilation(db, compilation_id)

    if changes.title is not None:
        await _ensure_title_free(db, changes.title, exclude_id=compilation_id)
        compilation.title = changes.title.strip()
    if changes.pinned is not None:
        compilation.pinned = changes.pinned
    if changes.events is not None:
        compilation.events = await _load_events(db, changes.events)

    await db.flush()
    logger.info("compilation_updated", compilation_id=compilation_id)
    return (await _to_dtos(db, stats, [compilation]))[0]


async def delete_compilation(db: AsyncSession, compilation_id: int) -> None:
    compilation = await _get_compilation(db, compilation_id)
    await db.delete(compilation)
    await db.flush()
    logger.info("compilation_deleted", compilation_id=compilation_id)


async def get_compilations(
    db: AsyncSession,
    stats: StatsClient,
    pinned: Optional[bool] = None,
    from_: int = 0,
    size: int = 10,
) -> list[CompilationDto]:
    query = select(Compilation)
    if pinned is not None:
        query = query.where(Compilation.pinned == pinned)
    result = await db.execute(query.order_by(Compilation.id.asc()).offset(from_).limit(size))
    return await _to_dtos(db, stats, list(result.scalars().all()))


async def get_compilation(db: AsyncSession, stats: StatsClient, compilation_id: int) -> CompilationDto:
    compilation = await _get_compilation(db, compilation_id)
    return (await _to_dtos(db, stats, [compilation]))[0]
