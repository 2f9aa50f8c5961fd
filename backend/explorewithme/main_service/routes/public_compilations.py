"""
Public compilation endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.api.params import Page, pagination
from explorewithme.db.session import get_db
from explorewithme.main_service.infrastructure import StatsClient, get_stats_client
from explorewithme.main_service.schemas import CompilationDto
from explorewithme.main_service.services import compilation_service

router = APIRouter(prefix="/compilations", tags=["Public: Compilations"])


@router.get("", response_model=list[CompilationDto])
async def get_compilations_endpoint(
    pinned: Optional[bool] = Query(None),
    page: Page = Depends(pagination),
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    return await compilation_service.get_compilations(db, stats, pinned, page.from_, page.size)


@router.get("/{comp_id}", response_model=CompilationDto)
async def get_compilation_endpoint(
    comp_id: int,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    return await compilation_service.get_compilation(db, stats, comp_id)
