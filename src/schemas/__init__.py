"""Schema definitions for content-press."""

from .content import Category, ContentSource, IndexDocument, ItemRecord, ItemSummary
from .site import BuildManifest, Page, PageEntry

__all__ = [
    "BuildManifest",
    "Category",
    "ContentSource",
    "IndexDocument",
    "ItemRecord",
    "ItemSummary",
    "Page",
    "PageEntry",
]
