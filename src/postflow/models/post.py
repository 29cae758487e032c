"""Post summary models for listing views."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CategoryRef(BaseModel):
    id: int
    name: str
    slug: str


class TagRef(BaseModel):
    id: int
    name: str
    slug: str


class MediaRef(BaseModel):
    """Cover image attached to a post."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    width: int | None = None
    height: int | None = None
    alt_text: str | None = Field(default=None, alias="altText")


class PostSummary(BaseModel):
    """Represents a published post as listed by the public posts endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    slug: str
    title: str
    excerpt: str = ""
    published_at: datetime = Field(..., alias="publishedAt")
    category: CategoryRef | None = None
    tags: list[TagRef] = Field(default_factory=list)
    cover_media: MediaRef | None = Field(default=None, alias="coverMedia")

    @property
    def path(self) -> str:
        """Site-relative path of the post detail page."""
        return f"/posts/{self.slug}"
