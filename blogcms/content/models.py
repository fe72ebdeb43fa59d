"""
Content models - dataclasses for articles and series.
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum


class ContentStatus(str, Enum):
    """Publication lifecycle of an article or series."""
    DRAFT = "draft"
    READY = "ready"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    FEATURED = "featured"


class ReleaseFrequency(str, Enum):
    """Cadence of a series release schedule."""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


@dataclass
class ReleaseSchedule:
    frequency: ReleaseFrequency | None = None
    start_date: datetime.date | None = None

    @property
    def is_complete(self) -> bool:
        return self.frequency is not None and self.start_date is not None


@dataclass
class SocialMedia:
    """Per-platform cross-posting flags."""
    linkedin: bool = False
    twitter: bool = False
    facebook: bool = False
    devto: bool = False

    def any_enabled(self) -> bool:
        return self.linkedin or self.twitter or self.facebook or self.devto


@dataclass
class Article:
    slug: str
    title: str
    description: str = ""
    author: str = ""
    date: datetime.date | None = None
    tags: list[str] = field(default_factory=list)
    category: str | None = None
    order: int | None = None
    series_slug: str | None = None
    is_standalone: bool = False
    cover_image: str | None = None
    github_repo: str | None = None
    status: ContentStatus | None = None
    publish_date: datetime.date | None = None
    social_media: SocialMedia | None = None

    # Set only when the body is loaded
    content: str | None = None

    # File stem on disk (keeps the NN- order prefix for series articles)
    file_stem: str | None = None

    @property
    def publication_day(self) -> datetime.date | None:
        """Day the article goes out: the scheduled date, else its date."""
        return self.publish_date or self.date


@dataclass
class ArticleSummary:
    """Entry of the article list cached in a series file."""
    slug: str
    title: str
    description: str = ""
    order: int | None = None
    status: ContentStatus | None = None
    publish_date: datetime.date | None = None


@dataclass
class Series:
    slug: str
    name: str
    description: str = ""
    category: str | None = None
    cover_image: str | None = None
    github_repo: str | None = None
    status: ContentStatus | None = None
    publish_date: datetime.date | None = None
    release_schedule: ReleaseSchedule | None = None
    social_media: SocialMedia | None = None
    articles: list[Article] = field(default_factory=list)

    # Summaries as stored in _series.json; the resolved list above wins
    summaries: list[ArticleSummary] = field(default_factory=list)


@dataclass
class ArticleNavigation:
    article: Article
    prev_article: Article | None = None
    next_article: Article | None = None


@dataclass
class Publications:
    """Content going out on a given day."""
    day: datetime.date
    articles: list[Article] = field(default_factory=list)
    series: list[Series] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.articles and not self.series
