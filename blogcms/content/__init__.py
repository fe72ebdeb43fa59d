"""
Content module - file-backed series and articles.

The store owns the directory layout, the resolver aggregates and filters
content for readers, and the mutator is the development-only write path.
"""

from .models import (
    Article,
    ArticleNavigation,
    ArticleSummary,
    ContentStatus,
    Publications,
    ReleaseFrequency,
    ReleaseSchedule,
    Series,
    SocialMedia,
)
from .store import ContentStore
from .visibility import is_content_visible
from .schedule import calculate_article_publish_dates
from .resolver import ContentResolver
from .mutator import ContentMutator
from .slugs import slugify

__all__ = [
    "Article",
    "ArticleNavigation",
    "ArticleSummary",
    "ContentMutator",
    "ContentResolver",
    "ContentStatus",
    "ContentStore",
    "Publications",
    "ReleaseFrequency",
    "ReleaseSchedule",
    "Series",
    "SocialMedia",
    "calculate_article_publish_dates",
    "is_content_visible",
    "slugify",
]
