from typing import Optional

from explorewithme.core.dates import DateTime
from explorewithme.main_service.schemas.base import ApiModel, CommentText
from explorewithme.main_service.schemas.user import UserShortDto


class NewCommentDto(ApiModel):
    text: CommentText


class UpdateCommentDto(ApiModel):
    text: CommentText


class CommentDto(ApiModel):
    id: int
    text: str
    author: UserShortDto
    event_id: int
    created_on: DateTime
    updated_on: Optional[DateTime] = None
    edited: bool
    is_deleted: bool
