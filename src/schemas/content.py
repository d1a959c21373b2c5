"""Content schemas for CMS documents published to object storage.

The CMS publishes one index document per collection plus one document per
item:

    <base_url>/
    ├── blogs/
    │   ├── _index.json        # IndexDocument
    │   ├── {slug}.json        # ItemRecord
    │   └── ...
    └── categories/
        ├── _index.json        # JSON array of category slugs
        ├── {slug}.json        # Category
        └── ...
"""

import re

from pydantic import BaseModel, field_validator

SLUG_PATTERN = re.compile(r"[A-Za-z0-9._~-]+")


def check_slug(value: str) -> str:
    """Reject slugs that are not a single URL-safe path segment.

    Slugs appear unencoded in request addresses, output paths and links, so
    only unreserved URL characters are allowed.
    """
    if not value:
        raise ValueError("slug must not be empty")
    if not SLUG_PATTERN.fullmatch(value) or value.startswith(".") or ".." in value:
        raise ValueError(f"slug {value!r} is not a URL-safe path segment")
    return value


class ContentSource(BaseModel):
    """Base address from which all content documents are resolved.

    Attributes:
        base_url: URL prefix, stored without a trailing slash
    """

    base_url: str

    model_config = {"frozen": True}

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value


class ItemSummary(BaseModel):
    """Partial item record carried in a collection index.

    Attributes:
        slug: Unique identifier of the item
        name: Display title
        summary: Short-form summary text
    """

    slug: str
    name: str = ""
    summary: str = ""

    model_config = {"extra": "allow"}

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        return check_slug(value)


class ItemRecord(BaseModel):
    """Full item record (e.g. a blog post).

    Attributes:
        slug: Unique identifier of the item
        name: Display title
        summary: Short-form summary text
        body: Pre-rendered HTML content, treated as trusted markup
    """

    slug: str
    name: str
    summary: str
    body: str

    model_config = {"extra": "allow"}

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        return check_slug(value)


class IndexDocument(BaseModel):
    """Collection index listing item summaries in display order.

    Attributes:
        total_items: Count declared by the producer; not reconciled with items
        items: Item summaries in display order
    """

    total_items: int | None = None
    items: list[ItemSummary]

    model_config = {"extra": "allow"}

    @property
    def slugs(self) -> list[str]:
        return [item.slug for item in self.items]


class Category(BaseModel):
    """A content category."""

    slug: str
    name: str

    model_config = {"extra": "allow"}

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        return check_slug(value)
