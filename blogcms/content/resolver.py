"""
Content resolver - assembles the content tree into series and articles.

Every call re-reads the file system; there is no caching layer.
"""

import datetime
import logging
from collections import Counter
from typing import Callable

from ..exceptions import require_article, require_series
from .converters import record_to_article, record_to_series
from .models import Article, ArticleNavigation, ContentStatus, Publications, Series
from .slugs import strip_order_prefix
from .store import ContentStore
from .visibility import is_content_visible

logger = logging.getLogger(__name__)


def _neighbours(articles: list[Article], index: int) -> ArticleNavigation:
    return ArticleNavigation(
        article=articles[index],
        prev_article=articles[index - 1] if index > 0 else None,
        next_article=articles[index + 1] if index < len(articles) - 1 else None,
    )


def _newest_first(articles: list[Article]) -> list[Article]:
    """Sort by date descending; undated articles go last, ties keep input order."""
    dated = [a for a in articles if a.date is not None]
    undated = [a for a in articles if a.date is None]
    dated.sort(key=lambda a: a.date, reverse=True)
    return dated + undated


class ContentResolver:
    """Read-side aggregation of series and articles with visibility applied."""

    def __init__(
        self,
        store: ContentStore,
        production: bool = False,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.store = store
        self.production = production
        self.today = today

    def is_visible(self, status: ContentStatus | None, publish_date: datetime.date | None) -> bool:
        return is_content_visible(
            status, publish_date, production=self.production, today=self.today()
        )

    # ─────────────────────────────────────────────────────────────
    # Series
    # ─────────────────────────────────────────────────────────────

    def _load_series(self, series_slug: str) -> Series:
        path = self.store.series_file(series_slug)
        series = record_to_series(self.store.read_json(path), series_slug, path)
        series.articles = self.get_articles_by_series(series_slug)
        return series

    def get_all_series(self) -> list[Series]:
        """All visible series, each with its visible articles in order."""
        all_series = [self._load_series(slug) for slug in self.store.list_series_slugs()]
        return [s for s in all_series if self.is_visible(s.status, s.publish_date)]

    def get_series(self, series_slug: str) -> Series:
        """
        Get a single visible series.

        Raises:
            ContentNotFoundError: If the series does not exist or is not visible
        """
        series = None
        if self.store.series_exists(series_slug):
            series = self._load_series(series_slug)
            if not self.is_visible(series.status, series.publish_date):
                series = None
        return require_series(series, series_slug)

    # ─────────────────────────────────────────────────────────────
    # Articles
    # ─────────────────────────────────────────────────────────────

    def _read_article(self, series_slug: str | None, stem: str) -> Article:
        path = self.store.metadata_path(series_slug, stem)
        record = self.store.read_json(path)
        if series_slug is None:
            article = record_to_article(record, stem, file_stem=stem, path=path)
            article.is_standalone = True
            return article
        return record_to_article(
            record,
            strip_order_prefix(stem),
            series_slug=series_slug,
            file_stem=stem,
            path=path,
        )

    def get_articles_by_series(self, series_slug: str) -> list[Article]:
        """Visible articles of a series, ascending by order (missing order counts as 0)."""
        articles = [
            self._read_article(series_slug, stem)
            for stem in self.store.list_article_stems(series_slug)
        ]
        visible = [a for a in articles if self.is_visible(a.status, a.publish_date)]
        visible.sort(key=lambda a: a.order or 0)

        duplicates = [
            order for order, count in Counter(a.order for a in visible).items()
            if order is not None and count > 1
        ]
        if duplicates:
            logger.warning(f"Series '{series_slug}' has duplicate article orders: {sorted(duplicates)}")
        return visible

    def get_standalone_articles(self) -> list[Article]:
        """Visible standalone articles in file-name order."""
        articles = [
            self._read_article(None, stem)
            for stem in self.store.list_article_stems(None)
        ]
        return [a for a in articles if self.is_visible(a.status, a.publish_date)]

    def get_all_articles(self) -> list[Article]:
        """Every visible series and standalone article, newest first."""
        series_articles = [a for s in self.get_all_series() for a in s.articles]
        return _newest_first(series_articles + self.get_standalone_articles())

    def get_article_by_slug(
        self,
        slug: str,
        series_slug: str | None = None,
        with_content: bool = False,
    ) -> ArticleNavigation:
        """
        Find an article and its previous/next neighbours.

        With a series slug the lookup is confined to that series. Otherwise
        standalone articles are searched first (they have no neighbours),
        then every series in turn.

        Raises:
            ContentNotFoundError: If no visible article has the slug, or the
                given series does not exist or is not visible
        """
        navigation = None
        if series_slug is not None:
            navigation = self._find(self.get_series(series_slug).articles, slug)
        else:
            standalone = next((a for a in self.get_standalone_articles() if a.slug == slug), None)
            if standalone is not None:
                navigation = ArticleNavigation(article=standalone)
            else:
                for series in self.get_all_series():
                    navigation = self._find(series.articles, slug)
                    if navigation is not None:
                        break

        detail = slug if series_slug is None else f"{slug} in series {series_slug}"
        navigation = require_article(navigation, detail)
        if with_content:
            navigation.article.content = self.load_article_content(navigation.article)
        return navigation

    @staticmethod
    def _find(articles: list[Article], slug: str) -> ArticleNavigation | None:
        for index, article in enumerate(articles):
            if article.slug == slug:
                return _neighbours(articles, index)
        return None

    def load_article_content(self, article: Article) -> str:
        """Read the article body. A missing body file yields an empty string."""
        series_slug = None if article.is_standalone else article.series_slug
        stem = article.file_stem or article.slug
        body = self.store.read_body(series_slug, stem)
        if body is None:
            logger.warning(
                f"No content file for article '{article.slug}'"
                + (f" in series '{series_slug}'" if series_slug else "")
            )
            return ""
        return body

    # ─────────────────────────────────────────────────────────────
    # Publishing
    # ─────────────────────────────────────────────────────────────

    def get_published_on(self, day: datetime.date, social_only: bool = False) -> Publications:
        """
        Articles and series published on ``day``.

        An article counts by its scheduled publish date, falling back to its
        date; a series by its publish date. Only status ``published`` is
        considered. With ``social_only`` items without any social-media flag
        are left out.
        """
        def wanted(status, publication_day, social_media) -> bool:
            if status is not ContentStatus.PUBLISHED or publication_day != day:
                return False
            return not social_only or (social_media is not None and social_media.any_enabled())

        articles = [
            a for a in self.get_all_articles()
            if wanted(a.status, a.publication_day, a.social_media)
        ]
        series = [
            s for s in self.get_all_series()
            if wanted(s.status, s.publish_date, s.social_media)
        ]
        return Publications(day=day, articles=articles, series=series)
