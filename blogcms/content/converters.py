"""
Content record converters - convert JSON records to dataclasses and back.

Records on disk use camelCase keys; the dataclasses use snake_case field
names. The *_FIELDS tables below are the only place the two are mapped.
"""

import datetime
import logging
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ..exceptions import ContentParseError
from .models import (
    Article,
    ArticleSummary,
    ContentStatus,
    ReleaseFrequency,
    ReleaseSchedule,
    Series,
    SocialMedia,
)

logger = logging.getLogger(__name__)

ARTICLE_FIELDS = {
    "title": "title",
    "description": "description",
    "author": "author",
    "date": "date",
    "tags": "tags",
    "category": "category",
    "order": "order",
    "series_slug": "seriesSlug",
    "is_standalone": "isStandalone",
    "cover_image": "coverImage",
    "github_repo": "githubRepo",
    "status": "status",
    "publish_date": "publishDate",
    "social_media": "socialMedia",
}

SERIES_FIELDS = {
    "name": "name",
    "description": "description",
    "category": "category",
    "cover_image": "coverImage",
    "github_repo": "githubRepo",
    "status": "status",
    "publish_date": "publishDate",
    "release_schedule": "releaseSchedule",
    "social_media": "socialMedia",
}

SUMMARY_FIELDS = ("title", "description", "order", "status", "publish_date")


# ─────────────────────────────────────────────────────────────
# Scalar parsing
# ─────────────────────────────────────────────────────────────

def parse_date(value: Any, path: Path | None = None) -> datetime.date | None:
    """Parse an ISO date or datetime string into a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    try:
        if len(text) > 10:
            return datetime.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return datetime.date.fromisoformat(text)
    except ValueError as e:
        raise ContentParseError(path or Path("<record>"), f"invalid date {text!r}") from e


def parse_status(value: Any, path: Path | None = None) -> ContentStatus | None:
    if value is None or value == "":
        return None
    try:
        return ContentStatus(value)
    except ValueError as e:
        raise ContentParseError(path or Path("<record>"), f"unknown status {value!r}") from e


def parse_order(value: Any) -> int | None:
    """Parse an order value; anything non-numeric is treated as unset."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring malformed order value {value!r}")
        return None


def parse_social_media(value: Any) -> SocialMedia | None:
    if not isinstance(value, dict):
        return None
    return SocialMedia(
        linkedin=bool(value.get("linkedin", False)),
        twitter=bool(value.get("twitter", False)),
        facebook=bool(value.get("facebook", False)),
        devto=bool(value.get("devto", False)),
    )


def parse_release_schedule(value: Any, path: Path | None = None) -> ReleaseSchedule | None:
    if not isinstance(value, dict):
        return None
    frequency = value.get("frequency")
    try:
        frequency = ReleaseFrequency(frequency) if frequency else None
    except ValueError as e:
        raise ContentParseError(
            path or Path("<record>"), f"unknown release frequency {frequency!r}"
        ) from e
    return ReleaseSchedule(
        frequency=frequency,
        start_date=parse_date(value.get("startDate"), path),
    )


def _require(record: dict, key: str, path: Path | None) -> Any:
    try:
        return record[key]
    except KeyError:
        raise ContentParseError(path or Path("<record>"), f"missing field '{key}'") from None


# ─────────────────────────────────────────────────────────────
# Records -> dataclasses
# ─────────────────────────────────────────────────────────────

def record_to_article(
    record: dict,
    slug: str,
    *,
    series_slug: str | None = None,
    file_stem: str | None = None,
    path: Path | None = None,
) -> Article:
    """Convert an article metadata record to an Article."""
    if not isinstance(record, dict):
        raise ContentParseError(path or Path("<record>"), "expected a JSON object")

    tags = record.get("tags") or []
    return Article(
        slug=slug,
        title=_require(record, "title", path),
        description=record.get("description") or "",
        author=record.get("author") or "",
        date=parse_date(record.get("date"), path),
        tags=[str(tag) for tag in tags],
        category=record.get("category"),
        order=parse_order(record.get("order")),
        series_slug=series_slug or record.get("seriesSlug"),
        is_standalone=series_slug is None and bool(record.get("isStandalone", False)),
        cover_image=record.get("coverImage"),
        github_repo=record.get("githubRepo"),
        status=parse_status(record.get("status"), path),
        publish_date=parse_date(record.get("publishDate"), path),
        social_media=parse_social_media(record.get("socialMedia")),
        file_stem=file_stem,
    )


def record_to_summary(record: dict, path: Path | None = None) -> ArticleSummary:
    return ArticleSummary(
        slug=_require(record, "slug", path),
        title=record.get("title") or "",
        description=record.get("description") or "",
        order=parse_order(record.get("order")),
        status=parse_status(record.get("status"), path),
        publish_date=parse_date(record.get("publishDate"), path),
    )


def record_to_series(record: dict, slug: str, path: Path | None = None) -> Series:
    """Convert a _series.json record to a Series (without resolved articles)."""
    if not isinstance(record, dict):
        raise ContentParseError(path or Path("<record>"), "expected a JSON object")

    summaries = [
        record_to_summary(item, path)
        for item in record.get("articles") or []
        if isinstance(item, dict)
    ]
    return Series(
        slug=slug,
        name=_require(record, "name", path),
        description=record.get("description") or "",
        category=record.get("category"),
        cover_image=record.get("coverImage"),
        github_repo=record.get("githubRepo"),
        status=parse_status(record.get("status"), path),
        publish_date=parse_date(record.get("publishDate"), path),
        release_schedule=parse_release_schedule(record.get("releaseSchedule"), path),
        social_media=parse_social_media(record.get("socialMedia")),
        summaries=summaries,
    )


# ─────────────────────────────────────────────────────────────
# Dataclasses / field updates -> records
# ─────────────────────────────────────────────────────────────

def to_json_value(value: Any) -> Any:
    """Convert a model value to its JSON representation."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, ReleaseSchedule):
        return {
            "frequency": to_json_value(value.frequency),
            "startDate": to_json_value(value.start_date),
        }
    if is_dataclass(value) and not isinstance(value, type):
        return {k: to_json_value(v) for k, v in asdict(value).items()}
    if isinstance(value, dict):
        # release schedules arrive from request bodies in snake_case
        return {_camel(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json_value(v) for v in value]
    return value


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def fields_to_record(fields: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    """
    Map model field names to on-disk keys and JSON values.

    Raises:
        ValueError: If a field name is not part of the mapping
    """
    unknown = sorted(set(fields) - set(mapping))
    if unknown:
        raise ValueError(f"Unknown field(s): {', '.join(unknown)}")
    return {mapping[name]: to_json_value(value) for name, value in fields.items()}


def article_fields_to_record(fields: dict[str, Any]) -> dict[str, Any]:
    return fields_to_record(fields, ARTICLE_FIELDS)


def series_fields_to_record(fields: dict[str, Any]) -> dict[str, Any]:
    return fields_to_record(fields, SERIES_FIELDS)


def article_record_to_summary_record(slug: str, record: dict[str, Any]) -> dict[str, Any]:
    """Build the summary entry cached in _series.json from an article record."""
    summary: dict[str, Any] = {"slug": slug}
    for name in SUMMARY_FIELDS:
        key = ARTICLE_FIELDS[name]
        if key in record:
            summary[key] = record[key]
    return summary
