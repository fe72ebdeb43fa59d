"""
Content store - file layout and raw reads/writes of content records.

Layout under the content root:

    series/<series-slug>/_series.json     series record
    series/<series-slug>/NN-<slug>.json   article metadata
    series/<series-slug>/NN-<slug>.mdx    article body
    standalone/<slug>.json                article metadata
    standalone/<slug>.mdx                 article body
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..exceptions import ContentParseError
from .slugs import strip_order_prefix

logger = logging.getLogger(__name__)

SERIES_DIRNAME = "series"
STANDALONE_DIRNAME = "standalone"
SERIES_FILENAME = "_series.json"
METADATA_SUFFIX = ".json"
BODY_SUFFIX = ".mdx"


class ContentStore:
    """Filesystem access to the content tree."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    # ─────────────────────────────────────────────────────────────
    # Paths
    # ─────────────────────────────────────────────────────────────

    @property
    def series_root(self) -> Path:
        return self.root / SERIES_DIRNAME

    @property
    def standalone_root(self) -> Path:
        return self.root / STANDALONE_DIRNAME

    def series_dir(self, series_slug: str) -> Path:
        return self.series_root / series_slug

    def series_file(self, series_slug: str) -> Path:
        return self.series_dir(series_slug) / SERIES_FILENAME

    def article_dir(self, series_slug: str | None) -> Path:
        if series_slug is None:
            return self.standalone_root
        return self.series_dir(series_slug)

    def metadata_path(self, series_slug: str | None, stem: str) -> Path:
        return self.article_dir(series_slug) / f"{stem}{METADATA_SUFFIX}"

    def body_path(self, series_slug: str | None, stem: str) -> Path:
        return self.article_dir(series_slug) / f"{stem}{BODY_SUFFIX}"

    # ─────────────────────────────────────────────────────────────
    # Listings
    # ─────────────────────────────────────────────────────────────

    def list_series_slugs(self) -> list[str]:
        """Series directory names, sorted. Directories without _series.json are skipped."""
        if not self.series_root.is_dir():
            return []
        slugs = []
        for path in sorted(self.series_root.iterdir()):
            if not path.is_dir() or path.name.startswith((".", "_")):
                continue
            if not (path / SERIES_FILENAME).exists():
                logger.warning(f"Skipping series directory without {SERIES_FILENAME}: {path}")
                continue
            slugs.append(path.name)
        return slugs

    def series_exists(self, series_slug: str) -> bool:
        return self.series_file(series_slug).exists()

    def list_article_stems(self, series_slug: str | None) -> list[str]:
        """File stems of article metadata files, in file-name order."""
        directory = self.article_dir(series_slug)
        if not directory.is_dir():
            return []
        return sorted(
            path.stem
            for path in directory.glob(f"*{METADATA_SUFFIX}")
            if not path.name.startswith("_")
        )

    def find_article_stem(self, series_slug: str | None, article_slug: str) -> str | None:
        """Locate the file stem for an article slug (order prefix ignored in series)."""
        for stem in self.list_article_stems(series_slug):
            slug = stem if series_slug is None else strip_order_prefix(stem)
            if slug == article_slug:
                return stem
        return None

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    def read_json(self, path: Path) -> dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ContentParseError(path, str(e)) from e
        if not isinstance(data, dict):
            raise ContentParseError(path, "expected a JSON object")
        return data

    def read_body(self, series_slug: str | None, stem: str) -> str | None:
        """Return the article body, or None when the body file is missing."""
        path = self.body_path(series_slug, stem)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    # ─────────────────────────────────────────────────────────────
    # Writes
    # ─────────────────────────────────────────────────────────────

    def write_json(self, path: Path, data: dict[str, Any]) -> None:
        self.write_text(path, json.dumps(data, ensure_ascii=False, indent=2) + "\n")

    def write_text(self, path: Path, text: str) -> None:
        """Write via a temporary sibling file and rename it into place."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
