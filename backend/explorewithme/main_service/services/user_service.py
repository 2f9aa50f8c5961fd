"""
User administration service. E-mail addresses are unique.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.exceptions import AlreadyExistsError, NotFoundError
from explorewithme.core.logging import get_logger
from explorewithme.main_service.models import User
from explorewithme.main_service.schemas import NewUserRequest, UpdateUserRequest, UserDto

logger = get_logger(__name__)


async def _ensure_email_free(db: AsyncSession, email: str) -> None:
    result = await db.execute(select(User.id).where(User.email == email))
    if result.first():
        logger.warning("user_email_taken", email=email)
        raise AlreadyExistsError("User", "email", email)


async def create_user(db: AsyncSession, new_user: NewUserRequest) -> UserDto:
    await _ensure_email_free(db, new_user.email)

    user = User(name=new_user.name, email=new_user.email)
    db.add(user)
    await db.flush()

    logger.info("user_created", user_id=user.id, email=user.email)
    return UserDto.model_validate(user)


async def update_user(db: AsyncSession, user_id: int, changes: UpdateUserRequest) -> UserDto:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)

    if changes.email is not None and changes.email != user.email:
        await _ensure_email_free(db, changes.email)
        user.email = changes.email
    if changes.name is not None:
        user.name = changes.name

    await db.flush()
    logger.info("user_updated", user_id=user_id)
    return UserDto.model_validate(user)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)

    await db.delete(user)
    await db.flush()
    logger.info("user_deleted", user_id=user_id)


async def get_users(
    db: AsyncSession,
    ids: Optional[list[int]] = None,
    from_: int = 0,
    size: int = 10,
) -> list[UserDto]:
    query = select(User)
    if ids:
        query = query.where(User.id.in_(ids))
    result = await db.execute(query.order_by(User.id.asc()).offset(from_).limit(size))
    return [UserDto.model_validate(u) for u in result.scalars().all()]
