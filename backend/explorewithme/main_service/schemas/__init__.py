from explorewithme.main_service.schemas.user import NewUserRequest, UpdateUserRequest, UserDto, UserShortDto
from explorewithme.main_service.schemas.category import CategoryDto, NewCategoryDto
from explorewithme.main_service.schemas.event import (
    AdminStateAction, EventFullDto, EventShortDto, EventSort, LocationDto, NewEventDto,
    UpdateEventAdminRequest, UpdateEventUserRequest, UserStateAction,
)
from explorewithme.main_service.schemas.request import (
    EventRequestStatusUpdateRequest, EventRequestStatusUpdateResult, ParticipationRequestDto,
)
from explorewithme.main_service.schemas.comment import CommentDto, NewCommentDto, UpdateCommentDto
from explorewithme.main_service.schemas.compilation import (
    CompilationDto, NewCompilationDto, UpdateCompilationRequest,
)

__all__ = [
    "NewUserRequest", "UpdateUserRequest", "UserDto", "UserShortDto",
    "CategoryDto", "NewCategoryDto",
    "AdminStateAction", "EventFullDto", "EventShortDto", "EventSort", "LocationDto", "NewEventDto",
    "UpdateEventAdminRequest", "UpdateEventUserRequest", "UserStateAction",
    "EventRequestStatusUpdateRequest", "EventRequestStatusUpdateResult", "ParticipationRequestDto",
    "CommentDto", "NewCommentDto", "UpdateCommentDto",
    "CompilationDto", "NewCompilationDto", "UpdateCompilationRequest",
]
