"""
Content mutator - development-only write path for series and articles.

Every operation refuses to run unless the mutator was created in
development mode. Each file is written atomically, but an article update
and the matching summary update in _series.json are two separate writes.
"""

import datetime
import logging
from typing import Any, Callable

from ..exceptions import (
    AlreadyExistsError,
    ContentNotFoundError,
    PermissionDeniedError,
    require_article,
)
from .converters import (
    article_fields_to_record,
    article_record_to_summary_record,
    parse_order,
    record_to_article,
    record_to_series,
    series_fields_to_record,
)
from .models import Article, ContentStatus, ReleaseSchedule, Series
from .schedule import calculate_article_publish_dates
from .slugs import series_article_stem, slugify, strip_order_prefix
from .store import ContentStore

logger = logging.getLogger(__name__)

# Fields owned by the file layout rather than by the record
LAYOUT_FIELDS = frozenset({"series_slug", "is_standalone"})


def _reject_null(fields: dict[str, Any], name: str) -> None:
    if name in fields and fields[name] is None:
        raise ValueError(f"Field cannot be empty: {name}")


def _check_order(order: Any) -> None:
    if order is not None and order < 0:
        raise ValueError(f"Order must not be negative: {order}")


def _summary_sort_key(summary: dict[str, Any]) -> int:
    return parse_order(summary.get("order")) or 0


class ContentMutator:
    """Create and update content files."""

    def __init__(
        self,
        store: ContentStore,
        development: bool = False,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.store = store
        self.development = development
        self.today = today

    def _require_development(self, action: str) -> None:
        if not self.development:
            raise PermissionDeniedError(f"{action} are only allowed in development mode")

    @staticmethod
    def _article_updates(fields: dict[str, Any] | None) -> dict[str, Any]:
        fields = dict(fields or {})
        locked = sorted(LAYOUT_FIELDS & set(fields))
        if locked:
            raise ValueError(f"Field(s) cannot be changed: {', '.join(locked)}")
        _reject_null(fields, "title")
        _check_order(fields.get("order"))
        return article_fields_to_record(fields)

    def _require_series_exists(self, series_slug: str) -> None:
        if not self.store.series_exists(series_slug):
            raise ContentNotFoundError(f"Series not found: {series_slug}")

    # ─────────────────────────────────────────────────────────────
    # Updates
    # ─────────────────────────────────────────────────────────────

    def update_article_metadata(
        self,
        series_slug: str | None,
        article_slug: str,
        fields: dict[str, Any],
    ) -> Article:
        """
        Merge ``fields`` onto an article's metadata file.

        For a series article the summary cached in _series.json is updated
        too and the summary list is re-sorted by order.

        Args:
            series_slug: Owning series, or None for a standalone article
            article_slug: Article slug (without order prefix)
            fields: Model field names and their new values

        Raises:
            PermissionDeniedError: Outside development mode
            ContentNotFoundError: If the series or article does not exist
            ValueError: If a field is unknown or cannot be changed
        """
        self._require_development("Article updates")
        updates = self._article_updates(fields)

        if series_slug is not None:
            self._require_series_exists(series_slug)
        stem = self.store.find_article_stem(series_slug, article_slug)
        detail = article_slug if series_slug is None else f"{article_slug} in series {series_slug}"
        stem = require_article(stem, detail)

        path = self.store.metadata_path(series_slug, stem)
        record = self.store.read_json(path)
        record.update(updates)
        self.store.write_json(path, record)
        logger.info(f"Updated article metadata {path.name}: {sorted(updates)}")

        if series_slug is not None:
            self._sync_summary(series_slug, article_slug, record)
        return record_to_article(
            record, article_slug, series_slug=series_slug, file_stem=stem, path=path
        )

    def update_article_content(
        self,
        series_slug: str | None,
        article_slug: str,
        content: str,
    ) -> None:
        """Replace an article's body file."""
        self._require_development("Article updates")
        if series_slug is not None:
            self._require_series_exists(series_slug)
        stem = require_article(self.store.find_article_stem(series_slug, article_slug), article_slug)
        path = self.store.body_path(series_slug, stem)
        self.store.write_text(path, content)
        logger.info(f"Updated article content {path.name}")

    def update_series_metadata(self, series_slug: str, fields: dict[str, Any]) -> Series:
        """
        Merge ``fields`` onto a series' _series.json.

        The cached article summaries are not writable through this call.
        """
        self._require_development("Series updates")
        _reject_null(fields, "name")
        updates = series_fields_to_record(fields)
        self._require_series_exists(series_slug)

        path = self.store.series_file(series_slug)
        record = self.store.read_json(path)
        record.update(updates)
        self.store.write_json(path, record)
        logger.info(f"Updated series metadata {series_slug}: {sorted(updates)}")
        return record_to_series(record, series_slug, path)

    def _sync_summary(self, series_slug: str, article_slug: str, article_record: dict) -> None:
        """Mirror an article record into its series' summary list."""
        path = self.store.series_file(series_slug)
        series_record = self.store.read_json(path)
        summaries = [s for s in series_record.get("articles") or [] if isinstance(s, dict)]

        summary = article_record_to_summary_record(article_slug, article_record)
        for existing in summaries:
            if existing.get("slug") == article_slug:
                existing.update(summary)
                break
        else:
            summaries.append(summary)

        summaries.sort(key=_summary_sort_key)
        series_record["articles"] = summaries
        self.store.write_json(path, series_record)

    # ─────────────────────────────────────────────────────────────
    # Creation
    # ─────────────────────────────────────────────────────────────

    def _new_article_record(self, title: str, updates: dict[str, Any]) -> dict[str, Any]:
        record = {
            "title": title,
            "description": "",
            "author": "",
            "date": self.today().isoformat(),
            "status": ContentStatus.DRAFT.value,
        }
        record.update(updates)
        return record

    def create_standalone_article(
        self,
        title: str,
        content: str = "",
        fields: dict[str, Any] | None = None,
    ) -> Article:
        """
        Create standalone/<slug>.json and <slug>.mdx from a title.

        Raises:
            PermissionDeniedError: Outside development mode
            AlreadyExistsError: If an article with the derived slug exists
        """
        self._require_development("Article creation")
        slug = slugify(title)
        updates = self._article_updates(fields)

        path = self.store.metadata_path(None, slug)
        if path.exists():
            raise AlreadyExistsError(f"Standalone article already exists: {slug}")

        record = self._new_article_record(title, updates)
        record["isStandalone"] = True
        self.store.write_json(path, record)
        self.store.write_text(self.store.body_path(None, slug), content)
        logger.info(f"Created standalone article {slug}")

        article = record_to_article(record, slug, file_stem=slug, path=path)
        article.is_standalone = True
        return article

    def create_series(
        self,
        name: str,
        description: str = "",
        fields: dict[str, Any] | None = None,
    ) -> Series:
        """
        Create series/<slug>/_series.json from a name.

        Raises:
            PermissionDeniedError: Outside development mode
            AlreadyExistsError: If a series with the derived slug exists
        """
        self._require_development("Series creation")
        slug = slugify(name)
        updates = series_fields_to_record(dict(fields or {}))

        if self.store.series_exists(slug):
            raise AlreadyExistsError(f"Series already exists: {slug}")

        record: dict[str, Any] = {
            "name": name,
            "description": description,
            "slug": slug,
            "status": ContentStatus.DRAFT.value,
        }
        record.update(updates)
        record["articles"] = []

        path = self.store.series_file(slug)
        self.store.write_json(path, record)
        logger.info(f"Created series {slug}")
        return record_to_series(record, slug, path)

    def next_order(self, series_slug: str) -> int:
        """One past the highest order used in the series."""
        orders = []
        for stem in self.store.list_article_stems(series_slug):
            record = self.store.read_json(self.store.metadata_path(series_slug, stem))
            orders.append(parse_order(record.get("order")) or 0)
        return max(orders, default=0) + 1

    def create_series_article(
        self,
        series_slug: str,
        title: str,
        content: str = "",
        order: int | None = None,
        fields: dict[str, Any] | None = None,
    ) -> Article:
        """
        Create NN-<slug>.json and NN-<slug>.mdx inside a series.

        ``order`` defaults to one past the current maximum; NN is the order
        zero-padded to two digits. The new article is added to the series'
        summary list.

        Raises:
            PermissionDeniedError: Outside development mode
            ContentNotFoundError: If the series does not exist
            AlreadyExistsError: If the series already has an article with the slug
        """
        self._require_development("Article creation")
        slug = slugify(title)
        fields = dict(fields or {})
        fields.pop("order", None)
        _check_order(order)
        updates = self._article_updates(fields)

        self._require_series_exists(series_slug)
        if self.store.find_article_stem(series_slug, slug) is not None:
            raise AlreadyExistsError(f"Article already exists: {slug} in series {series_slug}")

        if order is None:
            order = self.next_order(series_slug)
        stem = series_article_stem(order, slug)

        record = self._new_article_record(title, updates)
        record["order"] = order
        record["seriesSlug"] = series_slug

        path = self.store.metadata_path(series_slug, stem)
        self.store.write_json(path, record)
        self.store.write_text(self.store.body_path(series_slug, stem), content)
        self._sync_summary(series_slug, slug, record)
        logger.info(f"Created article {stem} in series {series_slug}")

        return record_to_article(record, slug, series_slug=series_slug, file_stem=stem, path=path)

    # ─────────────────────────────────────────────────────────────
    # Scheduling
    # ─────────────────────────────────────────────────────────────

    def update_series_schedule(
        self,
        series_slug: str,
        schedule: ReleaseSchedule,
        apply_to_articles: bool = False,
    ) -> tuple[Series, list[Article]]:
        """
        Set a series' release schedule and mark the series scheduled.

        With ``apply_to_articles`` every article of the series (regardless of
        its current status) gets the calculated publish date and status
        ``scheduled``.

        Returns:
            The updated series and the rescheduled articles in release order
            (empty when not applied)
        """
        series = self.update_series_metadata(
            series_slug,
            {"release_schedule": schedule, "status": ContentStatus.SCHEDULED},
        )
        if not apply_to_articles:
            return series, []

        articles = []
        for stem in self.store.list_article_stems(series_slug):
            path = self.store.metadata_path(series_slug, stem)
            articles.append(record_to_article(
                self.store.read_json(path),
                strip_order_prefix(stem),
                series_slug=series_slug,
                file_stem=stem,
                path=path,
            ))

        scheduled = calculate_article_publish_dates(series, articles)
        for article in scheduled:
            self.update_article_metadata(
                series_slug,
                article.slug,
                {"status": article.status, "publish_date": article.publish_date},
            )
        logger.info(f"Scheduled {len(scheduled)} article(s) in series {series_slug}")
        return series, scheduled
