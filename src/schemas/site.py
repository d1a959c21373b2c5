"""Generated site schemas.

A build renders every page in memory, then emits them together with a
manifest describing the output tree:

    dist/
    ├── build-manifest.json   # BuildManifest
    ├── site.css
    ├── blogs/
    │   ├── index.html         # listing page
    │   ├── {slug}/
    │   │   └── index.html     # detail page
    │   └── ...
    └── categories/
        └── index.html         # categories page (optional)
"""

from typing import Literal

from pydantic import BaseModel

PageKind = Literal["listing", "detail", "categories"]


class Page(BaseModel):
    """A rendered HTML page.

    Attributes:
        kind: Page type
        route: Route relative to the site root, ending with "/"
        title: Page title
        html: Rendered HTML document
        slug: Item slug for detail pages
    """

    kind: PageKind
    route: str
    title: str
    html: str
    slug: str | None = None

    @property
    def file_path(self) -> str:
        return f"{self.route}index.html"


class PageEntry(BaseModel):
    """A page recorded in the build manifest.

    Attributes:
        kind: Page type
        route: Route relative to the site root
        file_path: Relative path of the written HTML file
        checksum: SHA-256 hash of the written HTML
        slug: Item slug for detail pages
    """

    kind: PageKind
    route: str
    file_path: str
    checksum: str
    slug: str | None = None


class BuildManifest(BaseModel):
    """Manifest written beside the generated pages.

    Attributes:
        collection: Content collection the site was built from
        total_items: Count declared by the index document
        item_count: Number of items actually listed in the index
        pages: Pages in emission order
    """

    collection: str
    total_items: int | None = None
    item_count: int = 0
    pages: list[PageEntry] = []
