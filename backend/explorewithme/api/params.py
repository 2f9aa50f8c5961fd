"""
Query parameter helpers shared by the route modules.
"""

from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from fastapi import Query

from explorewithme.core.exceptions import InvalidArgumentError

T = TypeVar("T")


@dataclass
class Page:
    from_: int
    size: int


def pagination(
    from_: int = Query(0, ge=0, alias="from"),
    size: int = Query(10, ge=1),
) -> Page:
    """`from` is an offset in rows, not a page number."""
    return Page(from_=from_, size=size)


def split_list(
    values: Optional[list[str]],
    name: str,
    convert: Callable[[str], T],
) -> Optional[list[T]]:
    """
    Flatten a list query parameter sent repeated (`users=1&users=2`) or
    comma-separated (`users=1,2`) and convert each item.

    None stays None so an absent filter adds no constraint.

    Raises:
        InvalidArgumentError: If an item cannot be converted
    """
    if values is None:
        return None

    items = [item.strip() for value in values for item in value.split(",")]
    try:
        return [convert(item) for item in items if item]
    except ValueError:
        raise InvalidArgumentError(f"Invalid value in parameter '{name}': {values}", field=name)
