from typing import Optional

from explorewithme.main_service.schemas.base import ApiModel, CompilationTitle
from explorewithme.main_service.schemas.event import EventShortDto


class NewCompilationDto(ApiModel):
    title: CompilationTitle
    pinned: bool = False
    events: list[int] = []


class UpdateCompilationRequest(ApiModel):
    title: Optional[CompilationTitle] = None
    pinned: Optional[bool] = None
    events: Optional[list[int]] = None


class CompilationDto(ApiModel):
    id: int
    title: str
    pinned: bool
    events: list[EventShortDto] = []
