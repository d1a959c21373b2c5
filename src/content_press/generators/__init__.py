"""Generators for rendering and emitting static pages."""

from .links import link_for, listing_link, route_for
from .site_generator import SiteGenerator
from .writer import SiteWriter

__all__ = [
    "SiteGenerator",
    "SiteWriter",
    "link_for",
    "listing_link",
    "route_for",
]
