from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from explorewithme.core.dates import DateTime


class EndpointHitDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    app: str = Field(..., min_length=1, max_length=255)
    uri: str = Field(..., min_length=1, max_length=512)
    ip: str = Field(..., min_length=1, max_length=45)
    timestamp: DateTime


class ViewStatsDto(BaseModel):
    app: str
    uri: str
    hits: int
