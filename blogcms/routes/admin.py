"""
Admin routes: dashboard, content creation/editing, scheduling, calendar.

Only usable in development mode; every route is rejected with 403
otherwise.
"""

from contextlib import contextmanager
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from ..config import get_mutator
from ..content import ContentMutator, ContentStatus, ReleaseSchedule
from ..exceptions import PermissionDeniedError
from ..schemas import (
    ArticleResponse,
    ArticleUpdateRequest,
    CalendarItemResponse,
    ContentUpdateRequest,
    CreateArticleRequest,
    CreateSeriesArticleRequest,
    CreateSeriesRequest,
    DashboardResponse,
    ScheduleRequest,
    ScheduleResponse,
    SeriesResponse,
    SeriesUpdateRequest,
)
from ..services import CalendarService, CalendarServiceDep, ContentServiceDep


def require_development() -> None:
    """Reject admin access unless content edits are enabled."""
    if not get_mutator().development:
        raise PermissionDeniedError("The admin interface is only available in development mode")


router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_development)]
)

MutatorDep = Annotated[ContentMutator, Depends(get_mutator)]


@contextmanager
def invalid_fields_as_422():
    """Report rejected field updates as validation errors."""
    try:
        yield
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


# ─────────────────────────────────────────────────────────────
# Dashboard
# ─────────────────────────────────────────────────────────────

@router.get("/dashboard")
async def get_dashboard(service: ContentServiceDep) -> DashboardResponse:
    """Counts per status for articles and series, and the five newest articles."""
    overview = service.dashboard()
    return DashboardResponse(
        article_counts=overview["article_counts"],
        series_counts=overview["series_counts"],
        recent_articles=[ArticleResponse.from_model(a) for a in overview["recent_articles"]],
    )


# ─────────────────────────────────────────────────────────────
# Standalone Articles
# ─────────────────────────────────────────────────────────────

@router.post("/articles", status_code=201)
async def create_article(
    request: CreateArticleRequest,
    mutator: MutatorDep,
) -> ArticleResponse:
    """Create a standalone article; the slug is derived from the title."""
    with invalid_fields_as_422():
        article = mutator.create_standalone_article(
            request.title, request.content, request.to_fields()
        )
    return ArticleResponse.from_model(article)


@router.patch("/articles/{slug}")
async def update_article(
    slug: str,
    request: ArticleUpdateRequest,
    mutator: MutatorDep,
) -> ArticleResponse:
    """Update metadata of a standalone article. Unset fields are kept."""
    with invalid_fields_as_422():
        article = mutator.update_article_metadata(None, slug, request.to_fields())
    return ArticleResponse.from_model(article)


@router.put("/articles/{slug}/content", status_code=204)
async def update_article_content(
    slug: str,
    request: ContentUpdateRequest,
    mutator: MutatorDep,
) -> Response:
    """Replace the body of a standalone article."""
    mutator.update_article_content(None, slug, request.content)
    return Response(status_code=204)


# ─────────────────────────────────────────────────────────────
# Series
# ─────────────────────────────────────────────────────────────

@router.post("/series", status_code=201)
async def create_series(
    request: CreateSeriesRequest,
    mutator: MutatorDep,
) -> SeriesResponse:
    """Create a series; the slug is derived from the name."""
    with invalid_fields_as_422():
        series = mutator.create_series(
            request.name, request.description or "", request.to_fields()
        )
    return SeriesResponse.from_model(series)


@router.patch("/series/{series_slug}")
async def update_series(
    series_slug: str,
    request: SeriesUpdateRequest,
    mutator: MutatorDep,
) -> SeriesResponse:
    """Update series metadata. Unset fields are kept."""
    with invalid_fields_as_422():
        series = mutator.update_series_metadata(series_slug, request.to_fields())
    return SeriesResponse.from_model(series)


@router.put("/series/{series_slug}/schedule")
async def update_series_schedule(
    series_slug: str,
    request: ScheduleRequest,
    mutator: MutatorDep,
) -> ScheduleResponse:
    """
    Set a series release schedule and mark the series scheduled.

    With apply_to_articles every article of the series is given its
    calculated publish date and status scheduled.
    """
    schedule = ReleaseSchedule(frequency=request.frequency, start_date=request.start_date)
    series, articles = mutator.update_series_schedule(
        series_slug, schedule, request.apply_to_articles
    )
    return ScheduleResponse(
        series=SeriesResponse.from_model(series),
        scheduled_articles=[ArticleResponse.from_model(a) for a in articles],
    )


@router.post("/series/{series_slug}/articles", status_code=201)
async def create_series_article(
    series_slug: str,
    request: CreateSeriesArticleRequest,
    mutator: MutatorDep,
) -> ArticleResponse:
    """Create an article in a series; order defaults to the next free position."""
    with invalid_fields_as_422():
        article = mutator.create_series_article(
            series_slug, request.title, request.content, request.order, request.to_fields()
        )
    return ArticleResponse.from_model(article)


@router.patch("/series/{series_slug}/articles/{article_slug}")
async def update_series_article(
    series_slug: str,
    article_slug: str,
    request: ArticleUpdateRequest,
    mutator: MutatorDep,
) -> ArticleResponse:
    """Update metadata of a series article and its summary in the series file."""
    with invalid_fields_as_422():
        article = mutator.update_article_metadata(series_slug, article_slug, request.to_fields())
    return ArticleResponse.from_model(article)


@router.put("/series/{series_slug}/articles/{article_slug}/content", status_code=204)
async def update_series_article_content(
    series_slug: str,
    article_slug: str,
    request: ContentUpdateRequest,
    mutator: MutatorDep,
) -> Response:
    """Replace the body of a series article."""
    mutator.update_article_content(series_slug, article_slug, request.content)
    return Response(status_code=204)


# ─────────────────────────────────────────────────────────────
# Calendar
# ─────────────────────────────────────────────────────────────

KindQuery = Annotated[str | None, Query(pattern="^(article|series)$")]


def _export(service: CalendarService, body: str, extension: str, media_type: str) -> Response:
    filename = f"content-calendar-{service.resolver.today().isoformat()}.{extension}"
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/calendar")
async def get_calendar(
    service: CalendarServiceDep,
    status: ContentStatus | None = None,
    kind: KindQuery = None,
) -> list[CalendarItemResponse]:
    """Dated articles and series in chronological order."""
    return [CalendarItemResponse.from_item(item) for item in service.get_items(status, kind)]


@router.get("/calendar.csv")
async def export_calendar_csv(
    service: CalendarServiceDep,
    status: ContentStatus | None = None,
    kind: KindQuery = None,
) -> Response:
    """Download the calendar as CSV."""
    body = service.to_csv(service.get_items(status, kind))
    return _export(service, body, "csv", "text/csv; charset=utf-8")


@router.get("/calendar.ics")
async def export_calendar_ics(
    service: CalendarServiceDep,
    status: ContentStatus | None = None,
    kind: KindQuery = None,
) -> Response:
    """Download the calendar as an iCalendar file."""
    body = service.to_ics(service.get_items(status, kind))
    return _export(service, body, "ics", "text/calendar; charset=utf-8")
