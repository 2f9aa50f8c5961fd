"""
Admin compilation endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.db.session import get_db
from explorewithme.main_service.infrastructure import StatsClient, get_stats_client
from explorewithme.main_service.schemas import CompilationDto, NewCompilationDto, UpdateCompilationRequest
from explorewithme.main_service.services import compilation_service

router = APIRouter(prefix="/admin/compilations", tags=["Admin: Compilations"])


@router.post("", response_model=CompilationDto, status_code=status.HTTP_201_CREATED)
async def save_compilation_endpoint(
    new_compilation: NewCompilationDto,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    return await compilation_service.save_compilation(db, stats, new_compilation)


@router.patch("/{comp_id}", response_model=CompilationDto)
async def update_compilation_endpoint(
    comp_id: int,
    changes: UpdateCompilationRequest,
    db: AsyncSession = Depends(get_db),
    stats: StatsClient = Depends(get_stats_client),
):
    """Partial update; a supplied `events` list replaces the whole set."""
    return await compilation_service.update_compilation(db, stats, comp_id, changes)


@router.delete("/{comp_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_compilation_endpoint(
    comp_id: int,
    db: AsyncSession = Depends(get_db),
):
    await compilation_service.delete_compilation(db, comp_id)
