"""
Calendar service: dated view of articles and series with CSV/ICS export.
"""

import csv
import datetime
import io
from dataclasses import dataclass

from ..content import Article, ContentResolver, ContentStatus, Series

CSV_HEADERS = ["Title", "Type", "Status", "Date", "Category", "URL"]
ICS_PRODID = "-//blogcms//Content Calendar//EN"


@dataclass
class CalendarItem:
    id: str
    kind: str  # "article" or "series"
    title: str
    slug: str
    status: str
    date: datetime.date
    url: str
    category: str | None = None
    series_slug: str | None = None


def article_path(article: Article) -> str:
    if article.series_slug and not article.is_standalone:
        return f"/series/{article.series_slug}/{article.slug}"
    return f"/articles/{article.slug}"


def _ics_escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


class CalendarService:
    """Builds the content calendar from the resolver's output."""

    def __init__(self, resolver: ContentResolver, site_url: str = ""):
        self.resolver = resolver
        self.site_url = site_url.rstrip("/")

    def _article_item(self, article: Article) -> CalendarItem | None:
        day = article.publication_day
        if day is None:
            return None
        scope = article.series_slug if not article.is_standalone and article.series_slug else "standalone"
        return CalendarItem(
            id=f"article-{scope}-{article.slug}",
            kind="article",
            title=article.title,
            slug=article.slug,
            status=(article.status or ContentStatus.DRAFT).value,
            date=day,
            url=self.site_url + article_path(article),
            category=article.category,
            series_slug=article.series_slug,
        )

    def _series_item(self, series: Series) -> CalendarItem | None:
        if series.publish_date is None:
            return None
        return CalendarItem(
            id=f"series-{series.slug}",
            kind="series",
            title=series.name,
            slug=series.slug,
            status=(series.status or ContentStatus.DRAFT).value,
            date=series.publish_date,
            url=f"{self.site_url}/series/{series.slug}",
            category=series.category,
        )

    def get_items(
        self,
        status: ContentStatus | None = None,
        kind: str | None = None,
    ) -> list[CalendarItem]:
        """
        Dated calendar entries in chronological order.

        Articles are placed on their publish date (falling back to their
        date), series on their publish date. Undated content is left out.

        Args:
            status: Only items with this status (missing status counts as draft)
            kind: "article" or "series" to restrict the item type
        """
        items: list[CalendarItem] = []
        if kind in (None, "article"):
            items.extend(filter(None, map(self._article_item, self.resolver.get_all_articles())))
        if kind in (None, "series"):
            items.extend(filter(None, map(self._series_item, self.resolver.get_all_series())))
        if status is not None:
            items = [item for item in items if item.status == status.value]
        items.sort(key=lambda item: item.date)
        return items

    # ─────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def to_csv(items: list[CalendarItem]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for item in items:
            writer.writerow([
                item.title,
                item.kind,
                item.status,
                item.date.isoformat(),
                item.category or "",
                item.url,
            ])
        return buffer.getvalue()

    @staticmethod
    def to_ics(items: list[CalendarItem], now: datetime.datetime | None = None) -> str:
        """Render all-day VEVENTs, one per item."""
        now = now or datetime.datetime.now(datetime.timezone.utc)
        stamp = now.strftime("%Y%m%dT%H%M%SZ")
        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:{ICS_PRODID}",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
        ]
        for item in items:
            end = item.date + datetime.timedelta(days=1)
            description = (
                f"Status: {item.status}\nCategory: {item.category or 'None'}\nURL: {item.url}"
            )
            lines.extend([
                "BEGIN:VEVENT",
                f"UID:{item.id}@blogcms",
                f"DTSTAMP:{stamp}",
                f"DTSTART;VALUE=DATE:{item.date.strftime('%Y%m%d')}",
                f"DTEND;VALUE=DATE:{end.strftime('%Y%m%d')}",
                f"SUMMARY:{_ics_escape(f'{item.title} ({item.kind})')}",
                f"DESCRIPTION:{_ics_escape(description)}",
                f"URL:{item.url}",
                f"CATEGORIES:{_ics_escape(item.category or 'Uncategorized')}",
                "END:VEVENT",
            ])
        lines.append("END:VCALENDAR")
        return "\r\n".join(lines) + "\r\n"
