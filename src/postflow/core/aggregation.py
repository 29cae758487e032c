"""Category and tag post aggregation.

A leaf category is paged server-side. A root category is fetched together
with its children in one combined query, then de-duplicated, sorted by
publication time and windowed locally. Tag listings are always server-paged.
"""

from __future__ import annotations

from collections.abc import Iterable

from postflow.clients.content_feed import ContentFeed, PostQuery
from postflow.config import Settings
from postflow.core.hierarchy import CategoryLocation, locate_category
from postflow.errors import TagNotFoundError
from postflow.models.category import ChildCategory, RootCategory
from postflow.models.listing import CategoryListing
from postflow.models.page import Page, validate_window
from postflow.models.post import PostSummary
from postflow.models.tag import Tag
from postflow.utils.logging import get_logger

logger = get_logger(__name__)


def dedupe_posts(posts: Iterable[PostSummary]) -> list[PostSummary]:
    """Drop posts whose id was already seen, keeping the first occurrence."""
    seen: set[int] = set()
    unique: list[PostSummary] = []
    for post in posts:
        if post.id in seen:
            continue
        seen.add(post.id)
        unique.append(post)
    return unique


def sort_by_recency(posts: Iterable[PostSummary]) -> list[PostSummary]:
    """Most recent first. Equal timestamps keep their relative order."""
    return sorted(posts, key=lambda post: post.published_at, reverse=True)


class CategoryPostAggregator:
    """Builds paginated post listings for categories."""

    def __init__(self, feed: ContentFeed, settings: Settings):
        self.feed = feed
        self.settings = settings

    async def _locate(self, slug: str) -> CategoryLocation:
        categories = await self.feed.get_categories()
        return locate_category(categories, slug)

    async def get_category_posts(
        self,
        slug: str,
        page: int,
        page_size: int,
    ) -> Page[PostSummary]:
        """Return one page of posts for the category ``slug``.

        Raises:
            InvalidArgumentError: ``page_size`` is not positive or ``page`` is negative.
            CategoryNotFoundError: no category carries ``slug``.
            UpstreamError: the content API call failed.
        """
        validate_window(page, page_size)
        location = await self._locate(slug)
        return await self._posts_for(location.node, page, page_size)

    async def get_category_listing(
        self,
        slug: str,
        page: int = 0,
        page_size: int | None = None,
    ) -> CategoryListing:
        """Category, its parent and direct children, and one page of posts."""
        page_size = page_size if page_size is not None else self.settings.category_page_size
        validate_window(page, page_size)

        category, parent = await self._locate(slug)
        posts = await self._posts_for(category, page, page_size)

        if isinstance(category, RootCategory):
            return CategoryListing(category=category, children=category.children, posts=posts)
        return CategoryListing(category=category, parent=parent, posts=posts)

    async def _posts_for(
        self,
        category: RootCategory | ChildCategory,
        page: int,
        page_size: int,
    ) -> Page[PostSummary]:
        if isinstance(category, ChildCategory):
            return await self.feed.get_posts(
                PostQuery(page=page, size=page_size, category=category.slug)
            )

        posts = await self._fetch_combined(category.slugs)
        ordered = sort_by_recency(dedupe_posts(posts))
        return Page[PostSummary].window(ordered, page, page_size)

    async def _fetch_combined(self, slugs: list[str]) -> list[PostSummary]:
        """Fetch every post filed under any of ``slugs``."""
        size = self.settings.combined_fetch_size
        result = await self.feed.get_posts(PostQuery(page=0, size=size, categories=slugs))
        posts = list(result.content)

        if not result.is_truncated or result.last:
            return posts

        if not self.settings.exhaust_combined_fetch:
            logger.warning(
                f"Combined fetch for {slugs} returned {len(posts)} of "
                f"{result.total_elements} posts; counts are capped at {size}"
            )
            return posts

        number = 0
        while not result.last and result.content:
            number += 1
            result = await self.feed.get_posts(
                PostQuery(page=number, size=size, categories=slugs)
            )
            posts.extend(result.content)

        logger.debug(f"Combined fetch for {slugs} took {number + 1} requests")
        return posts


def find_tag(tags: Iterable[Tag], slug: str) -> Tag:
    """Return the tag carrying ``slug``."""
    for tag in tags:
        if tag.slug == slug:
            return tag
    raise TagNotFoundError(slug)


class TagPostAggregator:
    """Builds paginated post listings for tags."""

    def __init__(self, feed: ContentFeed, settings: Settings):
        self.feed = feed
        self.settings = settings

    async def get_tag_posts(
        self,
        slug: str,
        page: int,
        page_size: int | None = None,
    ) -> Page[PostSummary]:
        """Return one server-paged page of posts tagged ``slug``.

        Raises:
            InvalidArgumentError: ``page_size`` is not positive or ``page`` is negative.
            TagNotFoundError: no tag carries ``slug``.
            UpstreamError: the content API call failed.
        """
        page_size = page_size if page_size is not None else self.settings.category_page_size
        validate_window(page, page_size)

        find_tag(await self.feed.get_tags(), slug)
        return await self.feed.get_posts(PostQuery(page=page, size=page_size, tag=slug))
