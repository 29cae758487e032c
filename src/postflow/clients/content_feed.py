"""Client for the public content API (posts, categories, tags)."""

from __future__ import annotations

from typing import Any, Protocol

import httpx
from pydantic import BaseModel, Field, TypeAdapter

from postflow.clients.base import BaseAsyncClient
from postflow.config import Settings
from postflow.errors import PostNotFoundError, UpstreamError
from postflow.models.category import Category
from postflow.models.page import Page
from postflow.models.post import PostSummary
from postflow.models.tag import Tag
from postflow.utils.logging import get_logger

logger = get_logger(__name__)

_categories_adapter = TypeAdapter(list[Category])
_tags_adapter = TypeAdapter(list[Tag])


class PostQuery(BaseModel):
    """Parameters of the paged post query."""

    page: int = 0
    size: int = 12
    tag: str | None = None
    category: str | None = None
    categories: list[str] = Field(default_factory=list)

    def to_params(self) -> dict[str, str]:
        """Encode as query parameters. ``categories`` wins over ``category``."""
        params = {"page": str(self.page), "size": str(self.size)}
        if self.tag:
            params["tag"] = self.tag
        if self.categories:
            params["categories"] = ",".join(self.categories)
        elif self.category:
            params["category"] = self.category
        return params


class ContentFeed(Protocol):
    """Read operations the engine needs from the content API."""

    async def get_posts(self, query: PostQuery) -> Page[PostSummary]: ...

    async def get_categories(self) -> list[Category]: ...

    async def get_tags(self) -> list[Tag]: ...


class ContentFeedClient(BaseAsyncClient):
    """Client for the public endpoints of the content API."""

    POSTS_ENDPOINT = "/api/public/posts"
    CATEGORIES_ENDPOINT = "/api/public/categories"
    TAGS_ENDPOINT = "/api/public/tags"

    async def _get_payload(
        self,
        operation: str,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        try:
            return await self.get_json(endpoint, params=params)
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise UpstreamError(
                f"Content API error during {operation}: HTTP {status_code}",
                operation=operation,
                status_code=status_code,
                url=str(exc.request.url),
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"Content API request failed during {operation}: {exc}",
                operation=operation,
            ) from exc
        except ValueError as exc:
            raise UpstreamError(
                f"Content API returned invalid JSON during {operation}",
                operation=operation,
            ) from exc

    @staticmethod
    def _validate(operation: str, adapter: Any, payload: Any) -> Any:
        try:
            return adapter(payload)
        except ValueError as exc:
            raise UpstreamError(
                f"Unexpected payload during {operation}: {exc}",
                operation=operation,
            ) from exc

    async def get_posts(self, query: PostQuery) -> Page[PostSummary]:
        """Fetch one page of published posts."""
        params = query.to_params()
        logger.debug(f"Fetching posts {params}")
        payload = await self._get_payload("get_posts", self.POSTS_ENDPOINT, params)
        return self._validate("get_posts", Page[PostSummary].model_validate, payload)

    async def get_post(self, slug: str) -> PostSummary:
        """Fetch a single published post by slug."""
        try:
            payload = await self._get_payload("get_post", f"{self.POSTS_ENDPOINT}/{slug}")
        except UpstreamError as exc:
            if exc.status_code == 404:
                raise PostNotFoundError(slug) from exc
            raise
        return self._validate("get_post", PostSummary.model_validate, payload)

    async def get_categories(self) -> list[Category]:
        """Fetch every public category."""
        payload = await self._get_payload("get_categories", self.CATEGORIES_ENDPOINT)
        return self._validate("get_categories", _categories_adapter.validate_python, payload)

    async def get_tags(self) -> list[Tag]:
        """Fetch every public tag."""
        payload = await self._get_payload("get_tags", self.TAGS_ENDPOINT)
        return self._validate("get_tags", _tags_adapter.validate_python, payload)


def create_content_feed_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ContentFeedClient:
    """Factory function to create a ContentFeedClient."""
    return ContentFeedClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        transport=transport,
    )
