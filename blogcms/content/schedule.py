"""
Publish dates for the articles of a series with a release schedule.
"""

import calendar
import datetime
from dataclasses import replace

from .models import Article, ContentStatus, ReleaseFrequency, Series


def add_months(start: datetime.date, months: int) -> datetime.date:
    """Add calendar months, clamping to the last day of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return datetime.date(year, month, day)


def release_offset(start: datetime.date, frequency: ReleaseFrequency, index: int) -> datetime.date:
    """Publish day of the article at ``index`` (0-based) in release order."""
    if frequency is ReleaseFrequency.WEEKLY:
        return start + datetime.timedelta(days=7 * index)
    if frequency is ReleaseFrequency.BIWEEKLY:
        return start + datetime.timedelta(days=14 * index)
    return add_months(start, index)


def calculate_article_publish_dates(series: Series, articles: list[Article]) -> list[Article]:
    """
    Calculate publish dates for a series' articles from its release schedule.

    Articles are ordered by ``order`` (missing counts as 0, ties keep their
    input order) and the article at position i is scheduled i periods after
    the schedule start. Every returned article is marked scheduled.

    Returns the input unchanged when the series has no complete schedule;
    otherwise new Article objects, the inputs are not modified.
    """
    schedule = series.release_schedule
    if schedule is None or not schedule.is_complete:
        return articles

    ordered = sorted(articles, key=lambda a: a.order or 0)
    return [
        replace(
            article,
            status=ContentStatus.SCHEDULED,
            publish_date=release_offset(schedule.start_date, schedule.frequency, index),
        )
        for index, article in enumerate(ordered)
    ]
