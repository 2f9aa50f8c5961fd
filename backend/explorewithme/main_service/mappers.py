"""
Explicit ORM -> DTO mapping.

Computed attributes (confirmedRequests, views) are passed in by the caller;
they are never read from the entity.
"""

from explorewithme.main_service.models import Comment, Compilation, Event
from explorewithme.main_service.schemas import (
    CategoryDto, CommentDto, CompilationDto, EventFullDto, EventShortDto, LocationDto, UserShortDto,
)


def to_event_short_dto(event: Event, confirmed_requests: int = 0, views: int = 0) -> EventShortDto:
    return EventShortDto(
        id=event.id,
        annotation=event.annotation,
        category=CategoryDto.model_validate(event.category),
        confirmed_requests=confirmed_requests,
        event_date=event.event_date,
        initiator=UserShortDto.model_validate(event.initiator),
        paid=event.paid,
        title=event.title,
        views=views,
    )


def to_event_full_dto(event: Event, confirmed_requests: int = 0, views: int = 0) -> EventFullDto:
    return EventFullDto(
        id=event.id,
        annotation=event.annotation,
        category=CategoryDto.model_validate(event.category),
        confirmed_requests=confirmed_requests,
        created_on=event.created_on,
        description=event.description,
        event_date=event.event_date,
        initiator=UserShortDto.model_validate(event.initiator),
        location=LocationDto(lat=event.location.lat, lon=event.location.lon),
        paid=event.paid,
        participant_limit=event.participant_limit,
        published_on=event.published_on,
        request_moderation=event.request_moderation,
        comments_enabled=event.comments_enabled,
        state=event.state,
        title=event.title,
        views=views,
    )


def to_comment_dto(comment: Comment) -> CommentDto:
    return CommentDto(
        id=comment.id,
        text=comment.text,
        author=UserShortDto.model_validate(comment.author),
        event_id=comment.event_id,
        created_on=comment.created_on,
        updated_on=comment.updated_on,
        edited=comment.edited,
        is_deleted=comment.is_deleted,
    )


def to_compilation_dto(
    compilation: Compilation,
    confirmed: dict[int, int],
    views: dict[int, int],
) -> CompilationDto:
    return CompilationDto(
        id=compilation.id,
        title=compilation.title,
        pinned=compilation.pinned,
        events=[
            to_event_short_dto(e, confirmed.get(e.id, 0), views.get(e.id, 0))
            for e in compilation.events
        ],
    )
