"""
Article routes: list and detail.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ..config import get_resolver
from ..content import ContentResolver
from ..schemas import ArticleNavigationResponse, ArticleResponse
from ..services import ContentServiceDep

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("")
async def list_articles(
    service: ContentServiceDep,
    tag: str | None = None,
    category: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> list[ArticleResponse]:
    """Get visible articles, newest first, optionally filtered by tag or category."""
    articles = service.list_articles(tag=tag, category=category, limit=limit, offset=offset)
    return [ArticleResponse.from_model(a) for a in articles]


@router.get("/{slug}")
async def get_article(
    slug: str,
    resolver: Annotated[ContentResolver, Depends(get_resolver)],
) -> ArticleNavigationResponse:
    """Get an article by slug with its body and neighbours.

    Standalone articles are matched first, then articles of every series.
    """
    navigation = resolver.get_article_by_slug(slug, with_content=True)
    return ArticleNavigationResponse.from_model(navigation)
