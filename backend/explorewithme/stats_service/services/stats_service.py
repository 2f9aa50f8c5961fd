"""
Hit recording and aggregation.

Hits are immutable facts; every statistic is computed on read by grouping
the hits of a time range per (app, uri).
"""

import time
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.config import get_settings
from explorewithme.core.dates import now
from explorewithme.core.exceptions import InvalidArgumentError
from explorewithme.core.logging import get_logger
from explorewithme.core.metrics import hits_saved, stats_query_latency
from explorewithme.stats_service.models import EndpointHit
from explorewithme.stats_service.schemas import EndpointHitDto, ViewStatsDto

logger = get_logger(__name__)

VIEWS_WINDOW = timedelta(days=365 * 100)


async def save_hit(
    db: AsyncSession,
    app: Optional[str],
    uri: Optional[str],
    ip: Optional[str],
    timestamp: Optional[datetime],
) -> EndpointHitDto:
    for name, value in (("app", app), ("uri", uri), ("ip", ip), ("timestamp", timestamp)):
        if value is None:
            raise InvalidArgumentError(f"Hit field '{name}' must not be null", field=name)

    hit = EndpointHit(app=app, uri=uri, ip=ip, timestamp=timestamp)
    db.add(hit)
    await db.flush()

    hits_saved.inc()
    logger.debug("hit_saved", hit_id=hit.id, app=app, uri=uri)
    return EndpointHitDto.model_validate(hit)


async def get_stats(
    db: AsyncSession,
    start: datetime,
    end: datetime,
    uris: Optional[list[str]] = None,
    unique: bool = False,
) -> list[ViewStatsDto]:
    """
    Hit counts per (app, uri) within [start, end], most viewed first.

    unique=True counts distinct IPs instead of hits. An absent or empty
    `uris` means every uri.
    """
    if start > end:
        raise InvalidArgumentError("start cannot be after end", field="start")

    started = time.perf_counter()

    hits = func.count(distinct(EndpointHit.ip)) if unique else func.count(EndpointHit.id)
    query = (
        select(EndpointHit.app, EndpointHit.uri, hits.label("hits"))
        .where(EndpointHit.timestamp >= start, EndpointHit.timestamp <= end)
        .group_by(EndpointHit.app, EndpointHit.uri)
        .order_by(hits.desc(), EndpointHit.uri.asc())
    )
    if uris:
        query = query.where(EndpointHit.uri.in_(uris))

    result = await db.execute(query)
    stats = [ViewStatsDto(app=app, uri=uri, hits=count) for app, uri, count in result.all()]

    stats_query_latency.observe(time.perf_counter() - started)
    logger.debug("stats_computed", uris=uris, unique=unique, rows=len(stats))
    return stats


async def increment_view(db: AsyncSession, event_id: int, ip: str) -> EndpointHitDto:
    return await save_hit(db, get_settings().STATS_APP_NAME, f"/events/{event_id}", ip, now())


async def get_views_for_event(db: AsyncSession, event_id: int) -> int:
    end = datetime.now()
    uri = f"/events/{event_id}"
    stats = await get_stats(db, end - VIEWS_WINDOW, end, [uri], unique=False)
    return sum(s.hits for s in stats if s.uri == uri)
