from pydantic import Field

from explorewithme.core.dates import DateTime
from explorewithme.main_service.models.enums import RequestStatus
from explorewithme.main_service.schemas.base import ApiModel


class ParticipationRequestDto(ApiModel):
    id: int
    event: int = Field(validation_alias="event_id")
    requester: int = Field(validation_alias="requester_id")
    status: RequestStatus
    created: DateTime


class EventRequestStatusUpdateRequest(ApiModel):
    request_ids: list[int] = Field(..., min_length=1)
    status: RequestStatus


class EventRequestStatusUpdateResult(ApiModel):
    confirmed_requests: list[ParticipationRequestDto] = []
    rejected_requests: list[ParticipationRequestDto] = []
