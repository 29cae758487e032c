"""Sitemap assembly from the live content feeds."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from postflow.clients.content_feed import ContentFeed, PostQuery
from postflow.config import Settings
from postflow.models.category import Category
from postflow.models.post import PostSummary
from postflow.models.sitemap import ChangeFrequency, UrlEntry
from postflow.models.tag import Tag
from postflow.utils.logging import get_logger

logger = get_logger(__name__)

# (path, change frequency, priority)
STATIC_ROUTES: tuple[tuple[str, ChangeFrequency, float], ...] = (
    ("", ChangeFrequency.daily, 1.0),
    ("/posts", ChangeFrequency.daily, 0.9),
    ("/categories", ChangeFrequency.weekly, 0.7),
    ("/tags", ChangeFrequency.weekly, 0.7),
)

# Home and post index only.
FALLBACK_ROUTES = STATIC_ROUTES[:2]


class SitemapAssembler:
    """Builds the site's URL list from posts, categories and tags."""

    def __init__(self, feed: ContentFeed, settings: Settings):
        self.feed = feed
        self.settings = settings

    async def build_sitemap(self, now: datetime | None = None) -> list[UrlEntry]:
        """Return every public URL, or the fallback set if any feed fails."""
        now = now or datetime.now(timezone.utc)

        results = await asyncio.gather(
            self.feed.get_posts(PostQuery(page=0, size=self.settings.sitemap_post_limit)),
            self.feed.get_categories(),
            self.feed.get_tags(),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, Exception):
                logger.error(
                    "Sitemap generation failed, using static fallback", exc_info=result
                )
                return self._static_entries(FALLBACK_ROUTES, now)
            if isinstance(result, BaseException):
                raise result

        posts_page, categories, tags = results
        return [
            *self._static_entries(STATIC_ROUTES, now),
            *self._post_entries(posts_page.content),
            *self._category_entries(categories, now),
            *self._tag_entries(tags, now),
        ]

    def _static_entries(self, routes, now: datetime) -> list[UrlEntry]:
        return [
            UrlEntry(
                url=self.settings.site_url(path),
                last_modified=now,
                change_frequency=frequency,
                priority=priority,
            )
            for path, frequency, priority in routes
        ]

    def _post_entries(self, posts: list[PostSummary]) -> list[UrlEntry]:
        return [
            UrlEntry(
                url=self.settings.site_url(post.path),
                last_modified=post.published_at,
                change_frequency=ChangeFrequency.weekly,
                priority=0.8,
            )
            for post in posts
        ]

    def _category_entries(self, categories: list[Category], now: datetime) -> list[UrlEntry]:
        return [
            UrlEntry(
                url=self.settings.site_url(f"/categories/{category.slug}"),
                last_modified=now,
                change_frequency=ChangeFrequency.daily,
                priority=0.6,
            )
            for category in categories
        ]

    def _tag_entries(self, tags: list[Tag], now: datetime) -> list[UrlEntry]:
        return [
            UrlEntry(
                url=self.settings.site_url(f"/tags/{tag.slug}"),
                last_modified=now,
                change_frequency=ChangeFrequency.daily,
                priority=0.5,
            )
            for tag in tags
        ]
