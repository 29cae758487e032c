"""Category models: the API record and the two-level taxonomy tree."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """A category as returned by the public categories endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    slug: str
    parent_id: int | None = Field(default=None, alias="parentId")
    description: str | None = None
    post_count: int = Field(default=0, alias="postCount")

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class ChildCategory(BaseModel):
    """A leaf category. Its parent is always a root."""

    kind: Literal["child"] = "child"
    id: int
    name: str
    slug: str
    parent_id: int
    description: str | None = None
    post_count: int = 0

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def slugs(self) -> list[str]:
        return [self.slug]

    @classmethod
    def from_category(cls, category: Category) -> "ChildCategory":
        if category.parent_id is None:
            raise ValueError(f"Category '{category.slug}' has no parent")
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            parent_id=category.parent_id,
            description=category.description,
            post_count=category.post_count,
        )


class RootCategory(BaseModel):
    """A top-level category with zero or more direct children."""

    kind: Literal["root"] = "root"
    id: int
    name: str
    slug: str
    description: str | None = None
    post_count: int = 0
    children: list[ChildCategory] = Field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def slugs(self) -> list[str]:
        """Own slug followed by the slugs of the direct children."""
        return [self.slug, *(child.slug for child in self.children)]

    @classmethod
    def from_category(
        cls, category: Category, children: list[ChildCategory] | None = None
    ) -> "RootCategory":
        if category.parent_id is not None:
            raise ValueError(f"Category '{category.slug}' is not a root category")
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            description=category.description,
            post_count=category.post_count,
            children=children or [],
        )


CategoryNode = Annotated[Union[RootCategory, ChildCategory], Field(discriminator="kind")]
