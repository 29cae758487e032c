"""Tag models."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    """A tag as returned by the public tags endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    slug: str
    post_count: int = Field(default=0, alias="postCount")


class SizeClass(IntEnum):
    """Display weight of a tag in the tag cloud, smallest to largest."""

    SMALLEST = 1
    SMALL = 2
    MEDIUM = 3
    LARGE = 4
    LARGEST = 5


class WeightedTag(BaseModel):
    """A tag paired with its tag-cloud size class."""

    tag: Tag
    size_class: SizeClass
