"""
Pydantic models for API request/response validation.
"""

import datetime

from pydantic import BaseModel, Field

from .content import Article, ArticleNavigation, ContentStatus, ReleaseFrequency, Series
from .content.models import ReleaseSchedule, SocialMedia
from .services.calendar_service import CalendarItem


def _iso(value: datetime.date | None) -> str | None:
    return value.isoformat() if value else None


# ─────────────────────────────────────────────────────────────
# Shared
# ─────────────────────────────────────────────────────────────

class SocialMediaSchema(BaseModel):
    """Cross-posting flags per platform."""
    linkedin: bool = False
    twitter: bool = False
    facebook: bool = False
    devto: bool = False

    @classmethod
    def from_model(cls, social: SocialMedia | None) -> "SocialMediaSchema | None":
        if social is None:
            return None
        return cls(
            linkedin=social.linkedin,
            twitter=social.twitter,
            facebook=social.facebook,
            devto=social.devto,
        )


class ReleaseScheduleSchema(BaseModel):
    frequency: ReleaseFrequency
    start_date: datetime.date

    @classmethod
    def from_model(cls, schedule: ReleaseSchedule | None) -> "ReleaseScheduleSchema | None":
        if schedule is None or not schedule.is_complete:
            return None
        return cls(frequency=schedule.frequency, start_date=schedule.start_date)


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class ArticleResponse(BaseModel):
    """Article for list view."""
    slug: str
    title: str
    description: str
    author: str
    date: str | None
    tags: list[str] = []
    category: str | None = None
    order: int | None = None
    series_slug: str | None = None
    is_standalone: bool = False
    cover_image: str | None = None
    github_repo: str | None = None
    status: ContentStatus | None = None
    publish_date: str | None = None
    social_media: SocialMediaSchema | None = None

    @classmethod
    def from_model(cls, article: Article) -> "ArticleResponse":
        return cls(
            slug=article.slug,
            title=article.title,
            description=article.description,
            author=article.author,
            date=_iso(article.date),
            tags=article.tags,
            category=article.category,
            order=article.order,
            series_slug=article.series_slug,
            is_standalone=article.is_standalone,
            cover_image=article.cover_image,
            github_repo=article.github_repo,
            status=article.status,
            publish_date=_iso(article.publish_date),
            social_media=SocialMediaSchema.from_model(article.social_media),
        )


class ArticleDetailResponse(ArticleResponse):
    """Article with its body."""
    content: str = ""

    @classmethod
    def from_model(cls, article: Article) -> "ArticleDetailResponse":
        base = ArticleResponse.from_model(article).model_dump()
        return cls(**base, content=article.content or "")


class ArticleNavigationResponse(BaseModel):
    """Article with its neighbours in reading order."""
    article: ArticleDetailResponse
    prev_article: ArticleResponse | None = None
    next_article: ArticleResponse | None = None

    @classmethod
    def from_model(cls, navigation: ArticleNavigation) -> "ArticleNavigationResponse":
        return cls(
            article=ArticleDetailResponse.from_model(navigation.article),
            prev_article=ArticleResponse.from_model(navigation.prev_article) if navigation.prev_article else None,
            next_article=ArticleResponse.from_model(navigation.next_article) if navigation.next_article else None,
        )


class ArticleFields(BaseModel):
    """Writable article metadata. Unset fields are left untouched."""
    description: str | None = None
    author: str | None = None
    date: datetime.date | None = None
    tags: list[str] | None = None
    category: str | None = None
    cover_image: str | None = None
    github_repo: str | None = None
    status: ContentStatus | None = None
    publish_date: datetime.date | None = None
    social_media: SocialMediaSchema | None = None

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ArticleUpdateRequest(ArticleFields):
    """Request to update article metadata."""
    title: str | None = None
    order: int | None = Field(default=None, ge=0)


class CreateArticleRequest(ArticleFields):
    """Request to create a standalone article."""
    title: str
    content: str = ""

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"title", "content"})


class CreateSeriesArticleRequest(CreateArticleRequest):
    """Request to create an article inside a series."""
    order: int | None = Field(default=None, ge=0)

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"title", "content", "order"})


class ContentUpdateRequest(BaseModel):
    """Request to replace an article body."""
    content: str


# ─────────────────────────────────────────────────────────────
# Series Schemas
# ─────────────────────────────────────────────────────────────

class SeriesResponse(BaseModel):
    """Series for list view."""
    slug: str
    name: str
    description: str
    category: str | None = None
    cover_image: str | None = None
    github_repo: str | None = None
    status: ContentStatus | None = None
    publish_date: str | None = None
    release_schedule: ReleaseScheduleSchema | None = None
    social_media: SocialMediaSchema | None = None
    article_count: int = 0

    @classmethod
    def from_model(cls, series: Series) -> "SeriesResponse":
        return cls(
            slug=series.slug,
            name=series.name,
            description=series.description,
            category=series.category,
            cover_image=series.cover_image,
            github_repo=series.github_repo,
            status=series.status,
            publish_date=_iso(series.publish_date),
            release_schedule=ReleaseScheduleSchema.from_model(series.release_schedule),
            social_media=SocialMediaSchema.from_model(series.social_media),
            article_count=len(series.articles),
        )


class SeriesDetailResponse(SeriesResponse):
    """Series with its articles in reading order."""
    articles: list[ArticleResponse] = []

    @classmethod
    def from_model(cls, series: Series) -> "SeriesDetailResponse":
        base = SeriesResponse.from_model(series).model_dump()
        return cls(**base, articles=[ArticleResponse.from_model(a) for a in series.articles])


class SeriesFields(BaseModel):
    """Writable series metadata. Unset fields are left untouched."""
    description: str | None = None
    category: str | None = None
    cover_image: str | None = None
    github_repo: str | None = None
    status: ContentStatus | None = None
    publish_date: datetime.date | None = None
    release_schedule: ReleaseScheduleSchema | None = None
    social_media: SocialMediaSchema | None = None

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class SeriesUpdateRequest(SeriesFields):
    """Request to update series metadata."""
    name: str | None = None


class CreateSeriesRequest(SeriesFields):
    """Request to create a series."""
    name: str

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"name", "description"})


class ScheduleRequest(BaseModel):
    """Request to set a series release schedule."""
    frequency: ReleaseFrequency
    start_date: datetime.date
    apply_to_articles: bool = False


class ScheduleResponse(BaseModel):
    """Result of a schedule update."""
    series: SeriesResponse
    scheduled_articles: list[ArticleResponse]


# ─────────────────────────────────────────────────────────────
# Publishing & Admin Schemas
# ─────────────────────────────────────────────────────────────

class PublicationsResponse(BaseModel):
    """Content going out on a given day."""
    day: str
    articles: list[ArticleResponse]
    series: list[SeriesResponse]


class DashboardResponse(BaseModel):
    """Content counts per status and the most recent articles."""
    article_counts: dict[str, int]
    series_counts: dict[str, int]
    recent_articles: list[ArticleResponse]


class CalendarItemResponse(BaseModel):
    """One dated entry of the content calendar."""
    id: str
    kind: str
    title: str
    slug: str
    series_slug: str | None = None
    status: str
    date: str | None
    category: str | None = None
    url: str

    @classmethod
    def from_item(cls, item: CalendarItem) -> "CalendarItemResponse":
        return cls(
            id=item.id,
            kind=item.kind,
            title=item.title,
            slug=item.slug,
            series_slug=item.series_slug,
            status=item.status,
            date=item.date.isoformat(),
            category=item.category,
            url=item.url,
        )
