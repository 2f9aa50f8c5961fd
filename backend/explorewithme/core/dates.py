"""
Wire format for date-times.

Both services exchange naive local date-times as "yyyy-MM-dd HH:mm:ss".
ISO-8601 input is accepted as well and left to pydantic to parse.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, PlainSerializer

DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_date_time(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), DATE_TIME_FORMAT)
        except ValueError:
            return value
    return value


def to_naive_local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def format_date_time(value: datetime) -> str:
    return value.strftime(DATE_TIME_FORMAT)


def now() -> datetime:
    """Current local time truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


DateTime = Annotated[
    datetime,
    BeforeValidator(parse_date_time),
    AfterValidator(to_naive_local),
    PlainSerializer(format_date_time, return_type=str),
]
