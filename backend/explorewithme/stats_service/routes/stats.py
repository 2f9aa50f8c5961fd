"""
Stats service endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import split_list
from explorewithme.core.dates import DateTime
from explorewithme.db.session import get_stats_db
from explorewithme.stats_service.schemas import EndpointHitDto, ViewStatsDto
from explorewithme.stats_service.services import stats_service

router = APIRouter(tags=["Stats"])


@router.post("/hit", response_model=EndpointHitDto, status_code=status.HTTP_201_CREATED)
async def save_hit_endpoint(
    hit: EndpointHitDto,
    db: AsyncSession = Depends(get_stats_db),
):
    return await stats_service.save_hit(db, hit.app, hit.uri, hit.ip, hit.timestamp)


@router.get("/stats", response_model=list[ViewStatsDto])
async def get_stats_endpoint(
    start: DateTime = Query(...),
    end: DateTime = Query(...),
    uris: Optional[list[str]] = Query(None),
    unique: bool = Query(False),
    db: AsyncSession = Depends(get_stats_db),
):
    return await stats_service.get_stats(db, start, end, split_list(uris, "uris", str), unique)
