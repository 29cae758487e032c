"""Category detail listing."""

from pydantic import BaseModel, Field

from postflow.models.category import CategoryNode, ChildCategory, RootCategory
from postflow.models.page import Page
from postflow.models.post import PostSummary


class CategoryListing(BaseModel):
    """Everything the category detail view renders for one request."""

    category: CategoryNode
    parent: RootCategory | None = None
    children: list[ChildCategory] = Field(default_factory=list)
    posts: Page[PostSummary]
