"""Tag cloud weighting."""

from __future__ import annotations

from collections.abc import Sequence

from postflow.models.tag import SizeClass, Tag, WeightedTag

# Lower bounds (exclusive) of each band, checked from the largest down.
BAND_THRESHOLDS: tuple[tuple[float, SizeClass], ...] = (
    (0.8, SizeClass.LARGEST),
    (0.6, SizeClass.LARGE),
    (0.4, SizeClass.MEDIUM),
    (0.2, SizeClass.SMALL),
)


def size_class_for(count: int, min_count: int, max_count: int) -> SizeClass:
    """Map a post count onto a band relative to the observed range."""
    ratio = (count - min_count) / max(max_count - min_count, 1)
    for threshold, size_class in BAND_THRESHOLDS:
        if ratio > threshold:
            return size_class
    return SizeClass.SMALLEST


def bucketize(tags: Sequence[Tag]) -> list[WeightedTag]:
    """Order tags by popularity and assign each a size class."""
    if not tags:
        return []

    counts = [tag.post_count for tag in tags]
    min_count = max(min(counts), 1)
    max_count = max(max(counts), 1)

    ordered = sorted(tags, key=lambda tag: tag.post_count, reverse=True)
    return [
        WeightedTag(tag=tag, size_class=size_class_for(tag.post_count, min_count, max_count))
        for tag in ordered
    ]
