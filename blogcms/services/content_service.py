"""
Content service: read-side queries layered on the resolver.

Handles tag/category listings and filtering, and the dashboard overview.
"""

import datetime

from ..content import Article, ContentResolver, ContentStatus, Publications, Series

UNSPECIFIED = "unspecified"


def count_by_status(items: list[Article] | list[Series]) -> dict[str, int]:
    """Count items per status; items without a status count as unspecified."""
    counts = {status.value: 0 for status in ContentStatus}
    counts[UNSPECIFIED] = 0
    for item in items:
        key = item.status.value if item.status else UNSPECIFIED
        counts[key] += 1
    return counts


class ContentService:
    """Service for content listing business logic."""

    def __init__(self, resolver: ContentResolver):
        self.resolver = resolver

    # ─────────────────────────────────────────────────────────────
    # Listing & Filtering
    # ─────────────────────────────────────────────────────────────

    def list_articles(
        self,
        tag: str | None = None,
        category: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Article]:
        """
        Get visible articles, newest first.

        Args:
            tag: Only articles carrying this tag
            category: Only articles in this category
            limit: Maximum articles to return
            offset: Pagination offset
        """
        articles = self.resolver.get_all_articles()
        if tag:
            articles = [a for a in articles if tag in a.tags]
        if category:
            articles = [a for a in articles if a.category == category]
        end = offset + limit if limit is not None else None
        return articles[offset:end]

    def get_all_tags(self) -> list[str]:
        return sorted({tag for a in self.resolver.get_all_articles() for tag in a.tags})

    def get_all_categories(self) -> list[str]:
        return sorted({a.category for a in self.resolver.get_all_articles() if a.category})

    # ─────────────────────────────────────────────────────────────
    # Publishing
    # ─────────────────────────────────────────────────────────────

    def published_on(self, day: datetime.date | None = None, social_only: bool = False) -> Publications:
        """Content published on ``day`` (defaults to today)."""
        return self.resolver.get_published_on(day or self.resolver.today(), social_only=social_only)

    # ─────────────────────────────────────────────────────────────
    # Dashboard
    # ─────────────────────────────────────────────────────────────

    def dashboard(self, recent: int = 5) -> dict:
        """Status counts for articles and series plus the newest articles."""
        articles = self.resolver.get_all_articles()
        series = self.resolver.get_all_series()
        return {
            "article_counts": count_by_status(articles),
            "series_counts": count_by_status(series),
            "recent_articles": articles[:recent],
        }
