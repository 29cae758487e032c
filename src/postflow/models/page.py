"""Generic page model mirroring the content API's pageable responses."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from postflow.errors import InvalidArgumentError

T = TypeVar("T")


def validate_window(page: int, size: int) -> None:
    """Reject pagination arguments that cannot describe a window."""
    if size <= 0:
        raise InvalidArgumentError(f"Page size must be positive, got {size}")
    if page < 0:
        raise InvalidArgumentError(f"Page number must not be negative, got {page}")


class Page(BaseModel, Generic[T]):
    """One page of results, 0-based."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[T] = Field(default_factory=list)
    number: int = 0
    size: int = 0
    total_elements: int = Field(default=0, alias="totalElements")
    total_pages: int = Field(default=0, alias="totalPages")
    first: bool = True
    last: bool = True

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def empty(self) -> bool:
        return not self.content

    @property
    def is_truncated(self) -> bool:
        """True when the upstream holds more elements than this page reaches."""
        return self.number * self.size + len(self.content) < self.total_elements

    @classmethod
    def window(cls, items: Sequence[T], page: int, size: int) -> "Page[T]":
        """Slice an already ordered sequence into the requested page."""
        validate_window(page, size)

        start = page * size
        end = start + size
        total = len(items)

        return cls(
            content=list(items[start:end]),
            number=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size),
            first=page == 0,
            last=end >= total,
        )
