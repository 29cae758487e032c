"""Error types raised by the content engine."""

from __future__ import annotations


class PostflowError(Exception):
    """Base class for all errors raised by postflow."""


class NotFoundError(PostflowError):
    """A slug resolved to nothing. Shown to readers as a missing page."""

    resource = "resource"

    def __init__(self, slug: str) -> None:
        super().__init__(f"{self.resource.capitalize()} '{slug}' not found")
        self.slug = slug


class CategoryNotFoundError(NotFoundError):
    resource = "category"


class PostNotFoundError(NotFoundError):
    resource = "post"


class TagNotFoundError(NotFoundError):
    resource = "tag"


class InvalidArgumentError(PostflowError, ValueError):
    """Raised for out-of-range pagination arguments."""


class UpstreamError(PostflowError):
    """Raised when the content API call fails or returns an unusable payload."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code
        self.url = url


class HierarchyError(UpstreamError):
    """The category list breaks the two-level invariant."""

    def __init__(self, message: str) -> None:
        super().__init__(message, operation="get_categories")
