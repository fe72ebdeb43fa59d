"""
Service layer for business logic.

Services encapsulate business logic, keeping routes as thin HTTP adapters.
Each service receives its dependencies via constructor injection.

Usage in routes:
    from ..services import ContentServiceDep

    @router.get("/articles")
    async def list_articles(service: ContentServiceDep):
        return service.list_articles()
"""

from typing import Annotated

from fastapi import Depends

from ..config import config, get_resolver
from ..content import ContentResolver

from .calendar_service import CalendarItem, CalendarService
from .content_service import ContentService

__all__ = [
    # Services
    "CalendarItem",
    "CalendarService",
    "ContentService",
    # Dependency factories
    "get_calendar_service",
    "get_content_service",
    # Type aliases for dependency injection
    "CalendarServiceDep",
    "ContentServiceDep",
]


def get_content_service(
    resolver: Annotated[ContentResolver, Depends(get_resolver)]
) -> ContentService:
    """Dependency to get ContentService instance."""
    return ContentService(resolver=resolver)


def get_calendar_service(
    resolver: Annotated[ContentResolver, Depends(get_resolver)]
) -> CalendarService:
    """Dependency to get CalendarService instance."""
    return CalendarService(resolver=resolver, site_url=config.SITE_URL)


ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
CalendarServiceDep = Annotated[CalendarService, Depends(get_calendar_service)]
