"""Two-level category hierarchy: partitioning, validation and slug lookup."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import NamedTuple

from postflow.errors import CategoryNotFoundError, HierarchyError
from postflow.models.category import Category, ChildCategory, RootCategory


class CategoryPartition(NamedTuple):
    roots: list[Category]
    children_by_parent: dict[int, list[Category]]


def partition_categories(categories: Iterable[Category]) -> CategoryPartition:
    """Split categories into roots and per-parent child buckets in one stable pass."""
    roots: list[Category] = []
    children_by_parent: dict[int, list[Category]] = {}

    for category in categories:
        if category.parent_id is None:
            roots.append(category)
        else:
            children_by_parent.setdefault(category.parent_id, []).append(category)

    return CategoryPartition(roots=roots, children_by_parent=children_by_parent)


def find_category(categories: Iterable[Category], slug: str) -> Category:
    """Return the category carrying ``slug``."""
    for category in categories:
        if category.slug == slug:
            return category
    raise CategoryNotFoundError(slug)


class CategoryHierarchy:
    """A validated forest of root categories and their direct children."""

    def __init__(self, roots: list[RootCategory]):
        self.roots = roots

    @classmethod
    def from_categories(cls, categories: Iterable[Category]) -> "CategoryHierarchy":
        """Build the tree, rejecting children whose parent is missing or not a root."""
        partition = partition_categories(categories)
        root_ids = {root.id for root in partition.roots}

        for parent_id, children in partition.children_by_parent.items():
            if parent_id not in root_ids:
                slugs = ", ".join(child.slug for child in children)
                raise HierarchyError(
                    f"Categories [{slugs}] reference parent {parent_id}, "
                    "which is not a root category"
                )

        roots = [
            RootCategory.from_category(
                root,
                [
                    ChildCategory.from_category(child)
                    for child in partition.children_by_parent.get(root.id, [])
                ],
            )
            for root in partition.roots
        ]
        return cls(roots)

    def __iter__(self) -> Iterator[RootCategory | ChildCategory]:
        for root in self.roots:
            yield root
            yield from root.children

    def __len__(self) -> int:
        return sum(1 + len(root.children) for root in self.roots)

    def resolve(self, slug: str) -> RootCategory | ChildCategory:
        """Look up a category node by slug."""
        for node in self:
            if node.slug == slug:
                return node
        raise CategoryNotFoundError(slug)

    def flatten(self) -> list[tuple[RootCategory | ChildCategory, int]]:
        """Depth-first listing with depth level, roots at 0 and children at 1."""
        return [(node, 0 if isinstance(node, RootCategory) else 1) for node in self]


class CategoryLocation(NamedTuple):
    node: RootCategory | ChildCategory
    parent: RootCategory | None


def _root_node(root: Category, partition: CategoryPartition) -> RootCategory:
    children = partition.children_by_parent.get(root.id, [])
    return RootCategory.from_category(root, [ChildCategory.from_category(c) for c in children])


def locate_category(categories: Iterable[Category], slug: str) -> CategoryLocation:
    """Resolve ``slug`` and its parent, checking only that node's place in the tree.

    Malformed records elsewhere in the list do not affect the lookup.
    """
    categories = list(categories)
    category = find_category(categories, slug)
    partition = partition_categories(categories)

    if category.parent_id is None:
        return CategoryLocation(node=_root_node(category, partition), parent=None)

    for root in partition.roots:
        if root.id == category.parent_id:
            return CategoryLocation(
                node=ChildCategory.from_category(category),
                parent=_root_node(root, partition),
            )

    raise HierarchyError(
        f"Category '{slug}' references parent {category.parent_id}, "
        "which is not a root category"
    )


def resolve_category(categories: Iterable[Category], slug: str) -> RootCategory | ChildCategory:
    """Resolve a slug against a flat category list."""
    return locate_category(categories, slug).node
