from explorewithme.main_service.models.enums import EventState, RequestStatus
from explorewithme.main_service.models.user import User
from explorewithme.main_service.models.category import Category
from explorewithme.main_service.models.event import Event, Location
from explorewithme.main_service.models.request import ParticipationRequest
from explorewithme.main_service.models.comment import Comment
from explorewithme.main_service.models.compilation import Compilation, compilation_events

__all__ = [
    "EventState", "RequestStatus",
    "User", "Category", "Event", "Location",
    "ParticipationRequest", "Comment",
    "Compilation", "compilation_events",
]
