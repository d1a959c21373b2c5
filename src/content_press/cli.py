"""Command-line interface for content-press."""

import argparse
import logging
import sys
from pathlib import Path

from content_press.clients import ContentClient
from content_press.config import Settings, load_config, resolve_base
from content_press.generators import SiteGenerator, SiteWriter


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _load_settings(args: argparse.Namespace) -> Settings:
    """Layer command-line overrides on top of environment configuration."""
    return load_config({
        "base_url": getattr(args, "base_url", None),
        "collection": getattr(args, "collection", None),
        "base_path": getattr(args, "base_path", None),
        "site_title": getattr(args, "site_title", None),
        "item_label": getattr(args, "item_label", None),
        "item_label_plural": getattr(args, "item_label_plural", None),
        "output_dir": getattr(args, "output", None),
        "max_workers": getattr(args, "max_workers", None),
        "timeout": getattr(args, "timeout", None),
        "retry_attempts": getattr(args, "retry_attempts", None),
        "include_categories": getattr(args, "categories", None),
    })


def build(args: argparse.Namespace) -> int:
    """Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = _load_settings(args)
        source = resolve_base(settings)

        logger.info(f"Building '{settings.collection}' from {source.base_url}")

        with ContentClient(
            source, settings.client_config(), collection=settings.collection
        ) as client:
            generator = SiteGenerator(
                client,
                base_path=settings.base_path,
                site_title=settings.site_title,
                item_label=settings.item_label,
                item_label_plural=settings.item_label_plural,
                max_workers=settings.max_workers,
                include_categories=settings.include_categories,
            )
            index = client.fetch_index()
            pages = generator.generate(index)

        writer = SiteWriter(Path(settings.output_dir))
        manifest = writer.write(
            pages,
            collection=settings.collection,
            total_items=index.total_items,
            item_count=len(index.items),
        )

        logger.info(f"Built site: {settings.collection}")
        logger.info(f"  Items: {manifest.item_count}")
        logger.info(f"  Pages: {len(manifest.pages)}")
        logger.info(f"  Output: {settings.output_dir}")

        return 0

    except Exception as e:
        logger.error(f"Build failed: {e}")
        return 1


def list_items(args: argparse.Namespace) -> int:
    """Execute the list-items command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = _load_settings(args)
        source = resolve_base(settings)

        with ContentClient(
            source, settings.client_config(), collection=settings.collection
        ) as client:
            index = client.fetch_index()

        for item in index.items:
            logger.info(f"{item.slug}: {item.name}")
        logger.info(f"Items: {len(index.items)}")

        return 0

    except Exception as e:
        logger.error(f"Failed to list items: {e}")
        return 1


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Content source base URL (default: $CONTENT_PRESS_BASE_URL)",
    )
    parser.add_argument(
        "--collection",
        type=str,
        default=None,
        help="Collection name in storage (default: blogs)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="content-press",
        description="Build a static site from headless CMS JSON in object storage",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    build_parser = subparsers.add_parser(
        "build",
        help="Fetch content and generate the static site",
        description="Fetch the collection index and every item, render listing and detail pages, and write them to the output directory.",
    )
    _add_source_arguments(build_parser)
    build_parser.add_argument(
        "--base-path",
        type=str,
        default=None,
        help="Deployment path prefix for generated links (default: /)",
    )
    build_parser.add_argument(
        "--site-title",
        type=str,
        default=None,
        help="Site title shown on every page (default: Blog)",
    )
    build_parser.add_argument(
        "--item-label",
        type=str,
        default=None,
        help="Noun for one item in page wording (default: post)",
    )
    build_parser.add_argument(
        "--item-label-plural",
        type=str,
        default=None,
        help="Plural noun for items (default: item label + 's')",
    )
    build_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory for the generated site (default: dist)",
    )
    build_parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Maximum concurrent item fetches (default: 8)",
    )
    build_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: 30)",
    )
    build_parser.add_argument(
        "--retry-attempts",
        type=int,
        default=None,
        help="Attempts on connection errors and timeouts (default: 1)",
    )
    build_parser.add_argument(
        "--categories",
        action="store_true",
        default=None,
        help="Also render the categories page",
    )
    build_parser.set_defaults(func=build)

    list_parser = subparsers.add_parser(
        "list-items",
        help="List the items in the collection index",
        description="Fetch the collection index and print one line per item.",
    )
    _add_source_arguments(list_parser)
    list_parser.set_defaults(func=list_items)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
