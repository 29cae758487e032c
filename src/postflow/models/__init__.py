"""Pydantic data models."""

from postflow.models.category import Category, CategoryNode, ChildCategory, RootCategory
from postflow.models.listing import CategoryListing
from postflow.models.page import Page
from postflow.models.post import CategoryRef, MediaRef, PostSummary, TagRef
from postflow.models.sitemap import ChangeFrequency, UrlEntry
from postflow.models.tag import SizeClass, Tag, WeightedTag

__all__ = [
    "Category",
    "CategoryNode",
    "RootCategory",
    "ChildCategory",
    "CategoryListing",
    "Page",
    "PostSummary",
    "CategoryRef",
    "TagRef",
    "MediaRef",
    "UrlEntry",
    "ChangeFrequency",
    "Tag",
    "SizeClass",
    "WeightedTag",
]
