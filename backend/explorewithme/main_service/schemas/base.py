"""
Shared schema building blocks: camelCase wire names and bounded text fields.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def bounded_text(min_length: int, max_length: int):
    return Annotated[
        str,
        StringConstraints(min_length=min_length, max_length=max_length),
        AfterValidator(_not_blank),
    ]


AnnotationText = bounded_text(20, 2000)
DescriptionText = bounded_text(20, 7000)
TitleText = bounded_text(3, 120)
CategoryName = bounded_text(1, 50)
CompilationTitle = bounded_text(1, 128)
UserName = bounded_text(2, 250)
CommentText = bounded_text(1, 2000)
