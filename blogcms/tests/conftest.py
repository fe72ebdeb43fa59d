"""
Pytest fixtures for backend tests.
"""

import datetime
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from blogcms.config import state
from blogcms.content import ContentMutator, ContentResolver, ContentStore
from blogcms.server import app

TODAY = datetime.date(2024, 5, 1)


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def build_content_tree(root: Path) -> Path:
    """
    Populate a content tree:

    series/rust-basics (published, weekly schedule)
        01-getting-started  order 1  published   2024-01-01
        02-ownership        order 2  published   2024-01-08
        10-macros           order 4  featured    2024-01-22  (no body file)
        9-lifetimes         order 3  scheduled   2099-01-01
    series/draft-series (draft)
        01-intro            order 1  published   2024-02-01
    standalone
        hello-world         published  2024-03-01
        work-in-progress    draft      2024-04-01
        coming-soon         scheduled  2024-04-15
        next-month          scheduled  2024-06-01
    """
    rust = root / "series" / "rust-basics"
    write_json(rust / "_series.json", {
        "name": "Rust Basics",
        "description": "Learn Rust step by step",
        "slug": "rust-basics",
        "category": "programming",
        "status": "published",
        "publishDate": "2024-01-01",
        "releaseSchedule": {"frequency": "weekly", "startDate": "2024-01-01"},
        "socialMedia": {"linkedin": True},
        "articles": [
            {"slug": "getting-started", "title": "Getting Started", "order": 1},
            {"slug": "ownership", "title": "Ownership", "order": 2},
            {"slug": "lifetimes", "title": "Lifetimes", "order": 3},
            {"slug": "macros", "title": "Macros", "order": 4},
        ],
    })
    write_json(rust / "01-getting-started.json", {
        "title": "Getting Started",
        "description": "Installing the toolchain",
        "author": "Ada",
        "date": "2024-01-01",
        "tags": ["rust", "beginner"],
        "category": "programming",
        "order": 1,
        "seriesSlug": "rust-basics",
        "status": "published",
        "publishDate": "2024-01-01",
    })
    (rust / "01-getting-started.mdx").write_text("# Getting Started\n\nInstall rustup.\n", encoding="utf-8")
    write_json(rust / "02-ownership.json", {
        "title": "Ownership",
        "description": "Moves and borrows",
        "author": "Ada",
        "date": "2024-01-08",
        "tags": ["rust"],
        "category": "programming",
        "order": 2,
        "seriesSlug": "rust-basics",
        "status": "published",
    })
    (rust / "02-ownership.mdx").write_text("# Ownership\n", encoding="utf-8")
    write_json(rust / "10-macros.json", {
        "title": "Macros",
        "description": "macro_rules!",
        "author": "Ada",
        "date": "2024-01-22",
        "tags": ["rust", "advanced"],
        "order": 4,
        "seriesSlug": "rust-basics",
        "status": "featured",
    })
    write_json(rust / "9-lifetimes.json", {
        "title": "Lifetimes",
        "description": "'a and friends",
        "author": "Ada",
        "date": "2024-01-15",
        "order": 3,
        "seriesSlug": "rust-basics",
        "status": "scheduled",
        "publishDate": "2099-01-01",
    })
    (rust / "9-lifetimes.mdx").write_text("# Lifetimes\n", encoding="utf-8")

    drafts = root / "series" / "draft-series"
    write_json(drafts / "_series.json", {
        "name": "Draft Series",
        "description": "Not ready yet",
        "slug": "draft-series",
        "status": "draft",
        "articles": [{"slug": "intro", "title": "Intro", "order": 1}],
    })
    write_json(drafts / "01-intro.json", {
        "title": "Intro",
        "description": "",
        "author": "Ada",
        "date": "2024-02-01",
        "order": 1,
        "seriesSlug": "draft-series",
        "status": "published",
    })

    standalone = root / "standalone"
    write_json(standalone / "hello-world.json", {
        "title": "Hello World",
        "description": "First post",
        "author": "Ada",
        "date": "2024-03-01",
        "tags": ["intro"],
        "category": "general",
        "isStandalone": True,
        "status": "published",
        "socialMedia": {"devto": True},
    })
    (standalone / "hello-world.mdx").write_text("Hello, world!\n", encoding="utf-8")
    write_json(standalone / "work-in-progress.json", {
        "title": "Work in Progress",
        "description": "",
        "author": "Ada",
        "date": "2024-04-01",
        "isStandalone": True,
        "status": "draft",
    })
    write_json(standalone / "coming-soon.json", {
        "title": "Coming Soon",
        "description": "",
        "author": "Ada",
        "date": "2024-04-15",
        "isStandalone": True,
        "status": "scheduled",
        "publishDate": "2024-04-15",
    })
    write_json(standalone / "next-month.json", {
        "title": "Next Month",
        "description": "",
        "author": "Ada",
        "date": "2024-06-01",
        "isStandalone": True,
        "status": "scheduled",
        "publishDate": "2024-06-01",
    })
    return root


@pytest.fixture
def content_dir(tmp_path):
    """A populated content tree in a temporary directory."""
    return build_content_tree(tmp_path / "content")


@pytest.fixture
def store(content_dir):
    return ContentStore(content_dir)


@pytest.fixture
def dev_resolver(store):
    """Resolver in development mode: everything is visible."""
    return ContentResolver(store, production=False, today=lambda: TODAY)


@pytest.fixture
def prod_resolver(store):
    """Resolver in production mode with today fixed to TODAY."""
    return ContentResolver(store, production=True, today=lambda: TODAY)


@pytest.fixture
def mutator(store):
    """Mutator with edits enabled."""
    return ContentMutator(store, development=True, today=lambda: TODAY)


def _client(store: ContentStore, production: bool):
    original = (state.store, state.resolver, state.mutator)

    state.store = store
    state.resolver = ContentResolver(store, production=production, today=lambda: TODAY)
    state.mutator = ContentMutator(store, development=not production, today=lambda: TODAY)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    state.store, state.resolver, state.mutator = original


@pytest.fixture
def client(store):
    """Test client in development mode over an isolated content tree."""
    yield from _client(store, production=False)


@pytest.fixture
def prod_client(store):
    """Test client in production mode over an isolated content tree."""
    yield from _client(store, production=True)
