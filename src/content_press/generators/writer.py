"""Site writer: emits a generated page set to the output directory."""

import hashlib
import logging
import os
import shutil
import tempfile
from pathlib import Path

from schemas.site import BuildManifest, Page, PageEntry

from .site_generator import PACKAGE_ROOT

logger = logging.getLogger(__name__)

STYLESHEETS_DIR = PACKAGE_ROOT / "resources" / "stylesheets"
MANIFEST_NAME = "build-manifest.json"


def current_umask() -> int:
    """Return the process umask without changing it."""
    mask = os.umask(0)
    os.umask(mask)
    return mask


class SiteWriter:
    """Write a complete page set, shared assets, and a build manifest.

    The tree is assembled in a staging directory beside ``output_dir`` and
    swapped into place only once every file has been written, so the output
    directory never holds a partial build.

    Attributes:
        output_dir: Directory the site is published to
        stylesheet_name: Name of the shared CSS stylesheet
        stylesheets_dir: Directory containing stylesheets
    """

    def __init__(
        self,
        output_dir: Path,
        stylesheet_name: str = "site.css",
        stylesheets_dir: Path | None = None,
    ):
        self.output_dir = Path(output_dir)
        self.stylesheet_name = stylesheet_name
        self.stylesheets_dir = stylesheets_dir or STYLESHEETS_DIR

    def write(
        self,
        pages: list[Page],
        collection: str,
        total_items: int | None = None,
        item_count: int = 0,
    ) -> BuildManifest:
        """Write pages to the output directory.

        Args:
            pages: Complete page set from SiteGenerator.generate()
            collection: Collection the pages were built from
            total_items: Count declared by the index document
            item_count: Number of items listed in the index

        Returns:
            BuildManifest describing the written files

        Raises:
            ValueError: If two pages map to the same file
        """
        self._require_unique_paths(pages)

        parent = self.output_dir.resolve().parent
        parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{self.output_dir.name}-", dir=parent))

        try:
            manifest = BuildManifest(
                collection=collection,
                total_items=total_items,
                item_count=item_count,
            )
            for page in pages:
                manifest.pages.append(self._write_page(staging, page))

            self._copy_stylesheet(staging)
            self._write_manifest(staging, manifest)
            self._swap(staging)
        except Exception:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        logger.info(f"Wrote {len(pages)} pages to {self.output_dir}")
        return manifest

    def _write_page(self, root: Path, page: Page) -> PageEntry:
        path = root / page.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        data = page.html.encode("utf-8")
        path.write_bytes(data)
        logger.debug(f"Wrote {page.kind} page {page.file_path}")

        return PageEntry(
            kind=page.kind,
            route=page.route,
            file_path=page.file_path,
            checksum=hashlib.sha256(data).hexdigest(),
            slug=page.slug,
        )

    def _copy_stylesheet(self, root: Path) -> None:
        """Copy the stylesheet to the site root."""
        src = self.stylesheets_dir / self.stylesheet_name
        if src.exists():
            shutil.copyfile(src, root / self.stylesheet_name)
            logger.debug(f"Copied stylesheet {self.stylesheet_name}")
        else:
            logger.warning(f"Stylesheet not found: {src}")

    def _write_manifest(self, root: Path, manifest: BuildManifest) -> None:
        manifest_path = root / MANIFEST_NAME
        manifest_path.write_text(
            manifest.model_dump_json(indent=2, exclude_none=True) + "\n",
            encoding="utf-8",
        )

    def _swap(self, staging: Path) -> None:
        """Replace the output directory with the staged tree.

        mkdtemp creates the staging directory as 0700; it is widened to the
        mode a normal mkdir would give before it becomes the output root. If
        the staged tree cannot be moved into place the previous output is
        restored.
        """
        output = self.output_dir.resolve()
        staging.chmod(0o777 & ~current_umask())
        previous = None

        if output.exists():
            previous = output.with_name(f"{staging.name}-previous")
            output.rename(previous)

        try:
            staging.rename(output)
        except OSError:
            if previous is not None:
                previous.rename(output)
                logger.error(f"Could not replace {output}; previous build restored")
            raise

        if previous is not None:
            shutil.rmtree(previous)

    @staticmethod
    def _require_unique_paths(pages: list[Page]) -> None:
        seen: set[str] = set()
        for page in pages:
            if page.file_path in seen:
                raise ValueError(f"Two pages map to {page.file_path}")
            seen.add(page.file_path)
