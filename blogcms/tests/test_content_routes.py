"""
Tests for public read routes.
"""

from .conftest import write_json


class TestListArticles:
    """Tests for GET /articles endpoint."""

    def test_prod_lists_visible_newest_first(self, prod_client):
        response = prod_client.get("/articles")
        assert response.status_code == 200
        assert [a["slug"] for a in response.json()] == [
            "coming-soon", "hello-world", "macros", "ownership", "getting-started"
        ]

    def test_dev_lists_everything(self, client):
        response = client.get("/articles")
        assert response.status_code == 200
        assert len(response.json()) == 9

    def test_has_required_fields(self, prod_client):
        article = prod_client.get("/articles").json()[1]
        assert article["slug"] == "hello-world"
        assert article["title"] == "Hello World"
        assert article["date"] == "2024-03-01"
        assert article["is_standalone"] is True
        assert article["status"] == "published"
        assert article["social_media"]["devto"] is True
        assert "content" not in article

    def test_filter_by_tag(self, prod_client):
        response = prod_client.get("/articles?tag=rust")
        assert [a["slug"] for a in response.json()] == ["macros", "ownership", "getting-started"]

    def test_filter_by_category(self, prod_client):
        response = prod_client.get("/articles?category=general")
        assert [a["slug"] for a in response.json()] == ["hello-world"]

    def test_limit_and_offset(self, prod_client):
        response = prod_client.get("/articles?limit=2&offset=1")
        assert [a["slug"] for a in response.json()] == ["hello-world", "macros"]

    def test_invalid_limit(self, prod_client):
        assert prod_client.get("/articles?limit=0").status_code == 422

    def test_broken_metadata_is_server_error(self, prod_client, content_dir):
        (content_dir / "standalone" / "broken.json").write_text("{", encoding="utf-8")
        response = prod_client.get("/articles")
        assert response.status_code == 500
        assert "broken.json" in response.json()["detail"]


class TestGetArticle:
    """Tests for GET /articles/{slug} endpoint."""

    def test_standalone_with_content(self, prod_client):
        response = prod_client.get("/articles/hello-world")
        assert response.status_code == 200
        data = response.json()
        assert data["article"]["content"] == "Hello, world!\n"
        assert data["prev_article"] is None
        assert data["next_article"] is None

    def test_series_article_by_bare_slug(self, prod_client):
        data = prod_client.get("/articles/ownership").json()
        assert data["article"]["series_slug"] == "rust-basics"
        assert data["prev_article"]["slug"] == "getting-started"
        assert data["next_article"]["slug"] == "macros"

    def test_not_found(self, prod_client):
        response = prod_client.get("/articles/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Article not found: missing"

    def test_future_scheduled_not_found_in_prod(self, prod_client):
        assert prod_client.get("/articles/next-month").status_code == 404

    def test_future_scheduled_visible_in_dev(self, client):
        assert client.get("/articles/next-month").status_code == 200


class TestSeries:
    """Tests for /series endpoints."""

    def test_list_prod(self, prod_client):
        data = prod_client.get("/series").json()
        assert [s["slug"] for s in data] == ["rust-basics"]
        assert data[0]["article_count"] == 3

    def test_list_dev(self, client):
        data = client.get("/series").json()
        assert [s["slug"] for s in data] == ["draft-series", "rust-basics"]
        assert data[1]["article_count"] == 4

    def test_detail(self, prod_client):
        response = prod_client.get("/series/rust-basics")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Rust Basics"
        assert data["release_schedule"] == {"frequency": "weekly", "start_date": "2024-01-01"}
        assert [a["slug"] for a in data["articles"]] == ["getting-started", "ownership", "macros"]

    def test_hidden_series_not_found(self, prod_client):
        response = prod_client.get("/series/draft-series")
        assert response.status_code == 404
        assert response.json()["detail"] == "Series not found: draft-series"

    def test_series_article(self, prod_client):
        response = prod_client.get("/series/rust-basics/macros")
        assert response.status_code == 200
        data = response.json()
        assert data["article"]["content"] == ""
        assert data["prev_article"]["slug"] == "ownership"
        assert data["next_article"] is None

    def test_series_article_wrong_series(self, client):
        assert client.get("/series/draft-series/ownership").status_code == 404

    def test_article_of_hidden_series(self, prod_client):
        assert prod_client.get("/series/draft-series/intro").status_code == 404


class TestMisc:
    """Tests for status, taxonomy and publications."""

    def test_status(self, prod_client, content_dir):
        data = prod_client.get("/status").json()
        assert data["status"] == "ok"
        assert data["admin_enabled"] is False
        assert data["content_dir"] == str(content_dir)

    def test_status_dev(self, client):
        assert client.get("/status").json()["admin_enabled"] is True

    def test_tags(self, prod_client):
        assert prod_client.get("/tags").json() == ["advanced", "beginner", "intro", "rust"]

    def test_categories(self, prod_client):
        assert prod_client.get("/categories").json() == ["general", "programming"]

    def test_publications_for_day(self, prod_client):
        data = prod_client.get("/publications?day=2024-01-01").json()
        assert data["day"] == "2024-01-01"
        assert [a["slug"] for a in data["articles"]] == ["getting-started"]
        assert [s["slug"] for s in data["series"]] == ["rust-basics"]

    def test_publications_default_today(self, prod_client, content_dir):
        write_json(content_dir / "standalone" / "today.json", {
            "title": "Today", "date": "2024-05-01", "status": "published",
        })
        data = prod_client.get("/publications").json()
        assert data["day"] == "2024-05-01"
        assert [a["slug"] for a in data["articles"]] == ["today"]

    def test_publications_social_only(self, prod_client):
        data = prod_client.get("/publications?day=2024-01-01&social_only=true").json()
        assert data["articles"] == []
        assert [s["slug"] for s in data["series"]] == ["rust-basics"]

    def test_publications_invalid_day(self, prod_client):
        assert prod_client.get("/publications?day=yesterday").status_code == 422
