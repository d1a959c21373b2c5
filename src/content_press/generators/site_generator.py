"""Static site generator for CMS collections.

Turns a collection index plus per-item records into a listing page and one
detail page per item, rendered through Jinja2 templates.
"""

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TypeVar

from jinja2 import Environment, FileSystemLoader

from content_press.clients import ContentClient, FormatError
from schemas.content import Category, IndexDocument, ItemRecord
from schemas.site import Page

from .filters import FILTERS
from .links import (
    asset_link,
    categories_route,
    link_for,
    listing_link,
    listing_route,
    normalize_base_path,
    route_for,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Resolve the project root (4 levels up from this file):
#   site_generator.py → generators/ → content_press/ → src/ → project root
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "resources" / "templates"

DEFAULT_MAX_WORKERS = 8


class SiteGenerator:
    """Render the full page set for a content collection.

    The SiteGenerator:
    1. Fetches the collection index
    2. Renders the listing page in index order
    3. Fetches every item record concurrently and waits for all of them
    4. Renders one detail page per record

    Any failed fetch aborts generation; no partial page set is returned.

    Attributes:
        client: ContentClient used for all fetches
        base_path: Deployment path prefix folded into every link
        site_title: Title shown in page templates
        item_label: Noun for one item in page wording, e.g. "post"
        item_label_plural: Plural noun; defaults to item_label + "s"
        max_workers: Cap on concurrent item fetches
        include_categories: Whether generate() renders the categories page
    """

    def __init__(
        self,
        client: ContentClient,
        base_path: str = "/",
        site_title: str = "Blog",
        item_label: str = "post",
        item_label_plural: str | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        include_categories: bool = False,
        stylesheet_name: str = "site.css",
        templates_dir: Path | None = None,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.client = client
        self.base_path = normalize_base_path(base_path)
        self.site_title = site_title
        self.item_label = item_label
        self.item_label_plural = item_label_plural or f"{item_label}s"
        self.max_workers = max_workers
        self.include_categories = include_categories
        self.stylesheet_name = stylesheet_name
        self.templates_dir = templates_dir or TEMPLATES_DIR

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
        )
        for name, func in FILTERS.items():
            self._env.filters[name] = func

    @property
    def collection(self) -> str:
        return self.client.collection

    def link_for(self, slug: str) -> str:
        """Link to the detail page of an item."""
        return link_for(slug, self.base_path, self.collection)

    def generate(self, index: IndexDocument | None = None) -> list[Page]:
        """Render every page of the site.

        Args:
            index: Previously fetched index; fetched once here if omitted

        Returns:
            The listing page, then detail pages in index order, then the
            categories page if enabled
        """
        if index is None:
            index = self.client.fetch_index()

        logger.info(
            f"Generating site for '{self.collection}' with {len(index.items)} items"
        )

        pages = [self.listing_page(index)]
        pages.extend(self.all_detail_pages(index))
        if self.include_categories:
            pages.append(self.categories_page())

        logger.info(f"Generated {len(pages)} pages")
        return pages

    def listing_page(self, index: IndexDocument | None = None) -> Page:
        """Render the listing page with one card per item in index order."""
        if index is None:
            index = self.client.fetch_index()

        cards = [
            {"item": summary, "link": self.link_for(summary.slug)}
            for summary in index.items
        ]

        template = self._env.get_template("listing.html.j2")
        html = template.render(
            **self._common_context(),
            title=self.site_title,
            cards=cards,
        )

        return Page(
            kind="listing",
            route=listing_route(self.collection),
            title=self.site_title,
            html=html,
        )

    def all_detail_pages(self, index: IndexDocument | None = None) -> list[Page]:
        """Fetch every item in the index and render its detail page.

        Returns:
            Detail pages in index order, exactly one per slug

        Raises:
            FormatError: If the index lists a slug more than once, or a record
                is malformed
            FetchError: If any item fetch fails
        """
        if index is None:
            index = self.client.fetch_index()

        slugs = index.slugs
        self._require_unique(slugs, f"Index of '{self.collection}'")

        records = self._fetch_all(self.client.fetch_item, slugs)
        return [self._render_detail(record) for record in records]

    def categories_page(self) -> Page:
        """Fetch every category and render the categories page."""
        slugs = self.client.fetch_category_index()
        self._require_unique(slugs, "Category index")

        categories: list[Category] = self._fetch_all(self.client.fetch_category, slugs)

        template = self._env.get_template("categories.html.j2")
        html = template.render(
            **self._common_context(),
            title="Categories",
            categories=categories,
        )

        return Page(
            kind="categories",
            route=categories_route(),
            title="Categories",
            html=html,
        )

    def _render_detail(self, record: ItemRecord) -> Page:
        template = self._env.get_template("detail.html.j2")
        html = template.render(
            **self._common_context(),
            title=record.name,
            item=record,
            self_href=self.link_for(record.slug),
        )

        return Page(
            kind="detail",
            route=route_for(record.slug, self.collection),
            title=record.name,
            html=html,
            slug=record.slug,
        )

    def _common_context(self) -> dict:
        return {
            "site_title": self.site_title,
            "item_label": self.item_label,
            "item_label_plural": self.item_label_plural,
            "stylesheet_href": asset_link(self.stylesheet_name, self.base_path),
            "listing_href": listing_link(self.base_path, self.collection),
            "categories_href": (
                f"{self.base_path}/{categories_route()}"
                if self.include_categories
                else None
            ),
        }

    def _fetch_all(self, fetch: Callable[[str], T], slugs: list[str]) -> list[T]:
        """Fetch one document per slug concurrently and join on all of them.

        Args:
            fetch: Single-document fetch function
            slugs: Slugs to fetch

        Returns:
            Results in the order of ``slugs``

        Raises:
            ClientError: The first failure from any fetch; queued fetches are cancelled
        """
        if not slugs:
            return []

        results: dict[str, T] = {}
        workers = min(self.max_workers, len(slugs))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_slug = {executor.submit(fetch, slug): slug for slug in slugs}
            try:
                for future in as_completed(future_to_slug):
                    results[future_to_slug[future]] = future.result()
            except Exception:
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        logger.debug(f"Fetched {len(results)} documents with {workers} workers")
        return [results[slug] for slug in slugs]

    @staticmethod
    def _require_unique(slugs: Iterable[str], label: str) -> None:
        seen: set[str] = set()
        for slug in slugs:
            if slug in seen:
                raise FormatError(f"{label} lists slug '{slug}' more than once")
            seen.add(slug)
