"""
Pydantic schemas for user administration.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, EmailStr

from explorewithme.main_service.schemas.base import ApiModel, UserName

EMAIL_MIN_LENGTH = 6
EMAIL_MAX_LENGTH = 254


def _email_length(value: str) -> str:
    if not EMAIL_MIN_LENGTH <= len(value) <= EMAIL_MAX_LENGTH:
        raise ValueError(f"email must be {EMAIL_MIN_LENGTH}-{EMAIL_MAX_LENGTH} characters long")
    return value


Email = Annotated[EmailStr, AfterValidator(_email_length)]


class NewUserRequest(ApiModel):
    name: UserName
    email: Email


class UpdateUserRequest(ApiModel):
    name: Optional[UserName] = None
    email: Optional[Email] = None


class UserDto(ApiModel):
    id: int
    name: str
    email: str


class UserShortDto(ApiModel):
    id: int
    name: str
