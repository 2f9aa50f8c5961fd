"""
Comment service.

Rules:
- comments can only be added to PUBLISHED events with comments enabled
- only the author edits, only while the comment is not deleted and is younger
  than EDIT_WINDOW
- deletion is a soft flag (author or admin), an admin can restore it;
  both are idempotent
"""

from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.dates import now
from explorewithme.core.exceptions import BusinessRuleViolationError, NotFoundError
from explorewithme.core.logging import get_logger
from explorewithme.core.metrics import record_comment_operation
from explorewithme.main_service.mappers import to_comment_dto
from explorewithme.main_service.models import Comment, Event, EventState, User
from explorewithme.main_service.schemas import CommentDto, NewCommentDto, UpdateCommentDto

logger = get_logger(__name__)

EDIT_WINDOW = timedelta(hours=6)
SORT_CREATED_ASC = "createdOn,ASC"


async def _get_comment(db: AsyncSession, comment_id: int) -> Comment:
    comment = await db.get(Comment, comment_id)
    if not comment:
        raise NotFoundError("Comment", comment_id)
    return comment


async def _get_authored_comment(db: AsyncSession, user_id: int, comment_id: int) -> Comment:
    result = await db.execute(
        select(Comment).where(Comment.id == comment_id, Comment.author_id == user_id)
    )
    comment = result.scalar_one_or_none()
    if not comment:
        raise NotFoundError(
            "Comment", comment_id, f"Comment with id={comment_id} by user id={user_id} was not found"
        )
    return comment


async def add_comment(db: AsyncSession, user_id: int, event_id: int, new_comment: NewCommentDto) -> CommentDto:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)

    event = await db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event", event_id)

    if event.state != EventState.PUBLISHED:
        raise BusinessRuleViolationError(f"Event with id={event_id} is not published")
    if not event.comments_enabled:
        raise BusinessRuleViolationError(f"Comments are disabled for event with id={event_id}")

    comment = Comment(
        text=new_comment.text,
        author=user,
        event_id=event_id,
        created_on=now(),
        edited=False,
        is_deleted=False,
    )
    db.add(comment)
    await db.flush()

    record_comment_operation("create")
    logger.info("comment_created", comment_id=comment.id, user_id=user_id, event_id=event_id)
    return to_comment_dto(comment)


async def update_user_comment(
    db: AsyncSession,
    user_id: int,
    comment_id: int,
    changes: UpdateCommentDto,
) -> CommentDto:
    comment = await _get_authored_comment(db, user_id, comment_id)

    if comment.is_deleted:
        raise BusinessRuleViolationError(f"Comment with id={comment_id} is deleted")
    if comment.created_on <= datetime.now() - EDIT_WINDOW:
        raise BusinessRuleViolationError(
            f"Comment with id={comment_id} can no longer be edited: the edit window has expired"
        )

    comment.text = changes.text
    comment.edited = True
    comment.updated_on = now()
    await db.flush()

    record_comment_operation("edit")
    logger.info("comment_edited", comment_id=comment_id, user_id=user_id)
    return to_comment_dto(comment)


async def delete_user_comment(db: AsyncSession, user_id: int, comment_id: int) -> None:
    comment = await _get_authored_comment(db, user_id, comment_id)
    if not comment.is_deleted:
        comment.is_deleted = True
        await db.flush()
        record_comment_operation("delete")
    logger.info("comment_deleted", comment_id=comment_id, user_id=user_id)


async def delete_comment_by_admin(db: AsyncSession, comment_id: int) -> None:
    comment = await _get_comment(db, comment_id)
    if not comment.is_deleted:
        comment.is_deleted = True
        await db.flush()
        record_comment_operation("delete")
    logger.info("comment_deleted_by_admin", comment_id=comment_id)


async def restore_comment_by_admin(db: AsyncSession, comment_id: int) -> CommentDto:
    comment = await _get_comment(db, comment_id)
    if comment.is_deleted:
        comment.is_deleted = False
        await db.flush()
        record_comment_operation("restore")
    logger.info("comment_restored_by_admin", comment_id=comment_id)
    return to_comment_dto(comment)


async def get_comments_for_event(
    db: AsyncSession,
    event_id: int,
    from_: int = 0,
    size: int = 10,
    sort: str = "createdOn,DESC",
) -> list[CommentDto]:
    """Visible comments of an event; an event with comments disabled has none."""
    event = await db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event", event_id)

    if not event.comments_enabled:
        return []

    if sort == SORT_CREATED_ASC:
        order = (Comment.created_on.asc(), Comment.id.asc())
    else:
        order = (Comment.created_on.desc(), Comment.id.desc())

    result = await db.execute(
        select(Comment)
        .where(Comment.event_id == event_id, Comment.is_deleted.is_(False))
        .order_by(*order)
        .offset(from_)
        .limit(size)
    )
    return [to_comment_dto(c) for c in result.scalars().all()]


async def get_user_comments(db: AsyncSession, user_id: int, from_: int = 0, size: int = 10) -> list[CommentDto]:
    if not await db.get(User, user_id):
        raise NotFoundError("User", user_id)

    result = await db.execute(
        select(Comment)
        .where(Comment.author_id == user_id, Comment.is_deleted.is_(False))
        .order_by(Comment.created_on.desc(), Comment.id.desc())
        .offset(from_)
        .limit(size)
    )
    return [to_comment_dto(c) for c in result.scalars().all()]
