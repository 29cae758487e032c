"""Shared fixtures: an in-memory content feed and a small taxonomy."""

import math
from datetime import datetime, timezone

import pytest

from postflow.clients.content_feed import PostQuery
from postflow.config import Settings
from postflow.errors import UpstreamError
from postflow.models.category import Category
from postflow.models.page import Page
from postflow.models.post import CategoryRef, PostSummary
from postflow.models.tag import Tag


def make_post(post_id: int, day: int, category: str = "tech", slug: str | None = None) -> PostSummary:
    return PostSummary(
        id=post_id,
        slug=slug or f"post-{post_id}",
        title=f"Post {post_id}",
        published_at=datetime(2024, 1, day, tzinfo=timezone.utc),
        category=CategoryRef(id=0, name=category.title(), slug=category),
    )


class FakeFeed:
    """In-memory stand-in for ContentFeedClient.

    ``posts_by_category`` maps a category slug to the posts filed under it.
    A combined query concatenates the lists in slug order, so a post filed
    under several of the requested slugs comes back more than once.
    ``posts_by_tag`` does the same for tag queries.
    """

    def __init__(
        self,
        categories: list[Category] | None = None,
        tags: list[Tag] | None = None,
        posts_by_category: dict[str, list[PostSummary]] | None = None,
        fail: set[str] | None = None,
        page_cap: int | None = None,
        posts_by_tag: dict[str, list[PostSummary]] | None = None,
    ):
        self.categories = categories or []
        self.tags = tags or []
        self.posts_by_category = posts_by_category or {}
        self.fail = fail or set()
        self.page_cap = page_cap
        self.posts_by_tag = posts_by_tag or {}
        self.queries: list[PostQuery] = []
        self.calls: list[str] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail:
            raise UpstreamError(f"{operation} failed", operation=operation, status_code=503)

    async def get_posts(self, query: PostQuery) -> Page[PostSummary]:
        self._check("get_posts")
        self.queries.append(query)

        if query.tag:
            items = list(self.posts_by_tag.get(query.tag, []))
        elif query.categories:
            items = [p for slug in query.categories for p in self.posts_by_category.get(slug, [])]
        elif query.category:
            items = list(self.posts_by_category.get(query.category, []))
        else:
            unique = {p.id: p for posts in self.posts_by_category.values() for p in posts}
            items = sorted(unique.values(), key=lambda p: p.published_at, reverse=True)

        size = min(query.size, self.page_cap) if self.page_cap else query.size
        start = query.page * size
        return Page[PostSummary](
            content=items[start:start + size],
            number=query.page,
            size=size,
            total_elements=len(items),
            total_pages=math.ceil(len(items) / size),
            first=query.page == 0,
            last=start + size >= len(items),
        )

    async def get_categories(self) -> list[Category]:
        self._check("get_categories")
        return list(self.categories)

    async def get_tags(self) -> list[Tag]:
        self._check("get_tags")
        return list(self.tags)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        api_base_url="http://api.test",
        site_base_url="https://blog.example.com/",
    )


@pytest.fixture
def categories():
    return [
        Category(id=1, name="Tech", slug="tech"),
        Category(id=2, name="AI", slug="ai", parent_id=1),
        Category(id=3, name="Web", slug="web", parent_id=1),
        Category(id=4, name="Life", slug="life"),
    ]


@pytest.fixture
def tech_posts():
    """P1 in tech, P2 in ai, P3 in web and also returned under tech."""
    p1 = make_post(1, 3, "tech")
    p2 = make_post(2, 5, "ai")
    p3 = make_post(3, 1, "web")
    return {"tech": [p1, p3], "ai": [p2], "web": [p3]}


@pytest.fixture
def tags():
    return [
        Tag(id=1, name="Python", slug="python", post_count=5),
        Tag(id=2, name="Rust", slug="rust", post_count=10),
        Tag(id=3, name="Go", slug="go", post_count=1),
    ]


@pytest.fixture
def feed(categories, tech_posts, tags):
    python_posts = [make_post(2, 5, "ai"), make_post(1, 3, "tech")]
    return FakeFeed(
        categories=categories,
        tags=tags,
        posts_by_category=tech_posts,
        posts_by_tag={"python": python_posts},
    )
