"""Slug helpers shared by the resolver and the mutator."""

import re

ORDER_PREFIX = re.compile(r"^\d+-")
NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Derive a URL-safe slug from a title or name.

    Lowercases, collapses every run of non-alphanumeric characters into a
    single hyphen and strips leading/trailing hyphens.
    """
    slug = NON_ALPHANUMERIC.sub("-", text.lower()).strip("-")
    if not slug:
        raise ValueError(f"Cannot derive a slug from {text!r}")
    return slug


def strip_order_prefix(stem: str) -> str:
    """'03-intro-to-rust' -> 'intro-to-rust'."""
    return ORDER_PREFIX.sub("", stem)


def series_article_stem(order: int, slug: str) -> str:
    return f"{order:02d}-{slug}"
