"""
Content error conditions and helpers for common error patterns.

The resolver and mutator raise these; the server maps them to HTTP
responses (see server.register_exception_handlers).
"""

from pathlib import Path
from typing import TypeVar

T = TypeVar("T")


class ContentError(Exception):
    """Base class for content pipeline errors."""


class ContentNotFoundError(ContentError):
    """A requested article or series slug does not exist."""


class PermissionDeniedError(ContentError):
    """A content mutation was attempted outside development mode."""


class AlreadyExistsError(ContentError):
    """A create operation targets a slug that already has a file on disk."""


class ContentParseError(ContentError):
    """A content file could not be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse {path}: {reason}")


def require_resource(resource: T | None, detail: str = "Content not found") -> T:
    """
    Raise ContentNotFoundError if resource is None, otherwise return it.

    Usage:
        series = require_resource(find_series(slug), f"Series not found: {slug}")
    """
    if resource is None:
        raise ContentNotFoundError(detail)
    return resource


def require_article(article: T | None, slug: str) -> T:
    """Raise not-found if article is None."""
    return require_resource(article, f"Article not found: {slug}")


def require_series(series: T | None, slug: str) -> T:
    """Raise not-found if series is None."""
    return require_resource(series, f"Series not found: {slug}")
