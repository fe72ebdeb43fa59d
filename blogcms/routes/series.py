"""
Series routes: list, detail and articles within a series.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..config import get_resolver
from ..content import ContentResolver
from ..schemas import ArticleNavigationResponse, SeriesDetailResponse, SeriesResponse

router = APIRouter(prefix="/series", tags=["series"])


@router.get("")
async def list_series(
    resolver: Annotated[ContentResolver, Depends(get_resolver)]
) -> list[SeriesResponse]:
    """Get all visible series."""
    return [SeriesResponse.from_model(s) for s in resolver.get_all_series()]


@router.get("/{series_slug}")
async def get_series(
    series_slug: str,
    resolver: Annotated[ContentResolver, Depends(get_resolver)]
) -> SeriesDetailResponse:
    """Get a series with its articles in reading order."""
    return SeriesDetailResponse.from_model(resolver.get_series(series_slug))


@router.get("/{series_slug}/{article_slug}")
async def get_series_article(
    series_slug: str,
    article_slug: str,
    resolver: Annotated[ContentResolver, Depends(get_resolver)]
) -> ArticleNavigationResponse:
    """Get an article of a series with its body and previous/next articles."""
    navigation = resolver.get_article_by_slug(article_slug, series_slug, with_content=True)
    return ArticleNavigationResponse.from_model(navigation)
