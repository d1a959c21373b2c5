"""Content client for CMS documents published to object storage."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from schemas.content import (
    Category,
    ContentSource,
    IndexDocument,
    ItemRecord,
    check_slug,
)

from .client import Client
from .exceptions import FormatError

logger = logging.getLogger(__name__)


class ContentClient(Client):
    """Client for a collection of JSON documents published by a headless CMS.

    Every call issues exactly one GET (more only if transport retries are
    configured) and validates the decoded body against the matching schema
    before returning it. Nothing is cached.

    Example:
        source = ContentSource(base_url="https://pub-1234.r2.dev")
        with ContentClient(source, collection="blogs") as client:
            index = client.fetch_index()
            post = client.fetch_item(index.items[0].slug)
    """

    INDEX_NAME = "_index.json"
    CATEGORY_COLLECTION = "categories"

    def __init__(
        self,
        source: ContentSource,
        config: dict | None = None,
        collection: str = "blogs",
    ):
        super().__init__(source, config)
        self.collection = collection.strip("/")

    def fetch_index(self) -> IndexDocument:
        """Fetch the collection index.

        Returns:
            IndexDocument with item summaries in display order

        Raises:
            FetchError: If the content source returns a non-2xx response
            FormatError: If the body is not an object with an array-valued "items"
            ConnectionError: If the network connection fails
        """
        response = self.get(f"{self.collection}/{self.INDEX_NAME}")
        data = self._decode(response)

        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise FormatError(f"Unexpected index format for collection '{self.collection}'")

        index = self._validate(IndexDocument, data, f"Index of '{self.collection}'")

        if index.total_items is not None and index.total_items != len(index.items):
            logger.warning(
                f"Index of '{self.collection}' declares {index.total_items} items "
                f"but lists {len(index.items)}"
            )

        logger.debug(f"Fetched index of '{self.collection}' with {len(index.items)} items")
        return index

    def fetch_item(self, slug: str) -> ItemRecord:
        """Fetch the full record for a single item.

        Args:
            slug: Item identifier taken from the index

        Returns:
            Validated ItemRecord

        Raises:
            FetchError: If the content source returns a non-2xx response
            FormatError: If required fields are missing or the slug does not match
            ConnectionError: If the network connection fails
        """
        self._require_slug(slug, "Item")
        response = self.get(f"{self.collection}/{slug}.json")
        data = self._decode(response)

        if not isinstance(data, dict):
            raise FormatError(f"Item '{slug}' is not a JSON object")

        record = self._validate(ItemRecord, data, f"Item '{slug}'")
        if record.slug != slug:
            raise FormatError(
                f"Item '{slug}' returned a record with slug '{record.slug}'"
            )

        logger.debug(f"Fetched item '{slug}'")
        return record

    def fetch_category_index(self) -> list[str]:
        """Fetch the list of category slugs.

        Raises:
            FetchError: If the content source returns a non-2xx response
            FormatError: If the body is not an array of strings
        """
        response = self.get(f"{self.CATEGORY_COLLECTION}/{self.INDEX_NAME}")
        data = self._decode(response)

        if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
            raise FormatError("Category index must be an array of slug strings")

        for slug in data:
            self._require_slug(slug, "Category index entry")

        return data

    def fetch_category(self, slug: str) -> Category:
        """Fetch a single category by slug.

        Raises:
            FetchError: If the content source returns a non-2xx response
            FormatError: If the slug is unsafe, the record is malformed, or
                its slug does not match
        """
        self._require_slug(slug, "Category")
        response = self.get(f"{self.CATEGORY_COLLECTION}/{slug}.json")
        data = self._decode(response)

        if not isinstance(data, dict):
            raise FormatError(f"Category '{slug}' is not a JSON object")

        category = self._validate(Category, data, f"Category '{slug}'")
        if category.slug != slug:
            raise FormatError(
                f"Category '{slug}' returned a record with slug '{category.slug}'"
            )

        return category

    def _require_slug(self, slug: str, label: str) -> None:
        """Reject a slug before it is used in a request address."""
        try:
            check_slug(slug)
        except ValueError as e:
            raise FormatError(f"{label} '{slug}' is not a valid slug: {e}") from e

    def _decode(self, response: httpx.Response) -> Any:
        """Decode a JSON response body."""
        try:
            return response.json()
        except ValueError as e:
            raise FormatError(f"Response from {response.url} is not valid JSON") from e

    def _validate(self, model: type[BaseModel], data: dict, label: str) -> Any:
        """Validate decoded data against a schema.

        Args:
            model: Pydantic model to validate against
            data: Decoded JSON object
            label: Human-readable name of the document for error messages

        Raises:
            FormatError: If the data fails validation
        """
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise FormatError(
                f"{label} failed validation",
                errors=[str(err) for err in e.errors()],
            ) from e
