"""Route and link construction for generated pages.

Routes are relative to the site root and name the directory a page is written
to. Links are the same routes prefixed with the deployment base path, so a
link produced here always resolves to the file the generator emits.
"""


def normalize_base_path(base_path: str) -> str:
    """Normalize a deployment base path to "" or "/segment[/segment...]".

    Examples:
        >>> normalize_base_path("/")
        ''
        >>> normalize_base_path("docs/")
        '/docs'
    """
    stripped = (base_path or "").strip().strip("/")
    return f"/{stripped}" if stripped else ""


def listing_route(collection: str) -> str:
    return f"{collection}/"


def route_for(slug: str, collection: str) -> str:
    return f"{collection}/{slug}/"


def categories_route() -> str:
    return "categories/"


def link_for(slug: str, base_path: str = "/", collection: str = "blogs") -> str:
    """Build the link to an item's detail page.

    Examples:
        >>> link_for("hello-world", "/site/", "blogs")
        '/site/blogs/hello-world/'
    """
    return f"{normalize_base_path(base_path)}/{route_for(slug, collection)}"


def listing_link(base_path: str = "/", collection: str = "blogs") -> str:
    return f"{normalize_base_path(base_path)}/{listing_route(collection)}"


def asset_link(name: str, base_path: str = "/") -> str:
    return f"{normalize_base_path(base_path)}/{name}"
