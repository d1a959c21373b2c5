"""Jinja2 filters for page template rendering."""

import re


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Format a count with the matching noun form.

    Examples:
        >>> pluralize(1, "post")
        '1 post'
        >>> pluralize(3, "post")
        '3 posts'
    """
    if count == 1:
        return f"{count} {singular}"
    return f"{count} {plural or singular + 's'}"


def plain_text(html: str) -> str:
    """Strip markup and collapse whitespace, for meta descriptions.

    Examples:
        >>> plain_text("<p>Hello <em>world</em></p>")
        'Hello world'
    """
    if not html:
        return ""
    text = re.sub(r"<[^>]+>", " ", html)
    return re.sub(r"\s+", " ", text).strip()


# Registry of all filters for easy registration with Jinja2
FILTERS = {
    "pluralize": pluralize,
    "plain_text": plain_text,
}
