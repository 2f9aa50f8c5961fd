"""
Pydantic schemas for events: creation, partial updates and the two
representations returned to callers.
"""

import enum
from typing import Optional

from pydantic import Field

from explorewithme.core.dates import DateTime
from explorewithme.main_service.models.enums import EventState
from explorewithme.main_service.schemas.base import AnnotationText, ApiModel, DescriptionText, TitleText
from explorewithme.main_service.schemas.category import CategoryDto
from explorewithme.main_service.schemas.user import UserShortDto


class UserStateAction(str, enum.Enum):
    SEND_TO_REVIEW = "SEND_TO_REVIEW"
    CANCEL_REVIEW = "CANCEL_REVIEW"


class AdminStateAction(str, enum.Enum):
    PUBLISH_EVENT = "PUBLISH_EVENT"
    REJECT_EVENT = "REJECT_EVENT"


class EventSort(str, enum.Enum):
    EVENT_DATE = "EVENT_DATE"
    VIEWS = "VIEWS"


class LocationDto(ApiModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class NewEventDto(ApiModel):
    annotation: AnnotationText
    category: int = Field(..., gt=0)
    description: DescriptionText
    event_date: DateTime
    location: LocationDto
    paid: bool = False
    participant_limit: int = Field(0, ge=0)
    request_moderation: bool = True
    comments_enabled: bool = True
    title: TitleText


class UpdateEventRequest(ApiModel):
    """Partial update: a field left out (or null) keeps its current value."""

    annotation: Optional[AnnotationText] = None
    category: Optional[int] = Field(None, gt=0)
    description: Optional[DescriptionText] = None
    event_date: Optional[DateTime] = None
    location: Optional[LocationDto] = None
    paid: Optional[bool] = None
    participant_limit: Optional[int] = Field(None, ge=0)
    request_moderation: Optional[bool] = None
    comments_enabled: Optional[bool] = None
    title: Optional[TitleText] = None


class UpdateEventUserRequest(UpdateEventRequest):
    state_action: Optional[UserStateAction] = None


class UpdateEventAdminRequest(UpdateEventRequest):
    state_action: Optional[AdminStateAction] = None


class EventShortDto(ApiModel):
    id: int
    annotation: str
    category: CategoryDto
    confirmed_requests: int = 0
    event_date: DateTime
    initiator: UserShortDto
    paid: bool
    title: str
    views: int = 0


class EventFullDto(EventShortDto):
    created_on: DateTime
    description: str
    location: LocationDto
    participant_limit: int
    published_on: Optional[DateTime] = None
    request_moderation: bool
    comments_enabled: bool
    state: EventState
