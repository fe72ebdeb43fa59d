"""
Visibility of content based on its status and publish date.
"""

import datetime

from .models import ContentStatus

ALWAYS_VISIBLE = frozenset({ContentStatus.PUBLISHED, ContentStatus.FEATURED})


def is_content_visible(
    status: ContentStatus | str | None,
    publish_date: datetime.date | None,
    *,
    production: bool,
    today: datetime.date,
) -> bool:
    """
    Decide whether content should be shown.

    Outside production everything is visible so drafts can be previewed
    locally. In production:
    - no status: hidden
    - published / featured: visible
    - scheduled: visible once ``today`` reaches ``publish_date``
    - draft / ready: hidden

    Args:
        status: Content status
        publish_date: Scheduled publication day, if any
        production: Whether the app runs in production mode
        today: The current day in the configured time zone

    Returns:
        True if the content is visible
    """
    if not production:
        return True

    if not status:
        return False

    status = ContentStatus(status)
    if status in ALWAYS_VISIBLE:
        return True

    if status is ContentStatus.SCHEDULED and publish_date is not None:
        return today >= publish_date

    return False
