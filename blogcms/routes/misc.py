"""
Miscellaneous routes: health check, tags, categories, publications.
"""

import datetime

from fastapi import APIRouter

from .. import __version__
from ..config import config, state
from ..schemas import ArticleResponse, PublicationsResponse, SeriesResponse
from ..services import ContentServiceDep

router = APIRouter(tags=["misc"])


# ─────────────────────────────────────────────────────────────
# Health Check
# ─────────────────────────────────────────────────────────────

@router.get("/status")
async def health_check() -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "environment": config.APP_ENV,
        "content_dir": str(state.store.root) if state.store else None,
        "admin_enabled": bool(state.mutator and state.mutator.development),
    }


# ─────────────────────────────────────────────────────────────
# Taxonomy
# ─────────────────────────────────────────────────────────────

@router.get("/tags")
async def list_tags(service: ContentServiceDep) -> list[str]:
    """All tags used by visible articles, sorted."""
    return service.get_all_tags()


@router.get("/categories")
async def list_categories(service: ContentServiceDep) -> list[str]:
    """All categories used by visible articles, sorted."""
    return service.get_all_categories()


# ─────────────────────────────────────────────────────────────
# Publications
# ─────────────────────────────────────────────────────────────

@router.get("/publications")
async def get_publications(
    service: ContentServiceDep,
    day: datetime.date | None = None,
    social_only: bool = False,
) -> PublicationsResponse:
    """
    Content published on a day (default: today).

    Feeds the newsletter and cross-posting jobs. With social_only, only
    content flagged for at least one social platform is returned.
    """
    publications = service.published_on(day, social_only=social_only)
    return PublicationsResponse(
        day=publications.day.isoformat(),
        articles=[ArticleResponse.from_model(a) for a in publications.articles],
        series=[SeriesResponse.from_model(s) for s in publications.series],
    )
