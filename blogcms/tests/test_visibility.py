"""
Tests for content visibility.
"""

import datetime

import pytest

from blogcms.content import ContentStatus, is_content_visible

TODAY = datetime.date(2024, 5, 1)


class TestDevelopmentMode:
    """Outside production everything is visible."""

    @pytest.mark.parametrize("status", [None, *ContentStatus])
    def test_every_status_visible(self, status):
        assert is_content_visible(status, None, production=False, today=TODAY)

    def test_future_scheduled_visible(self):
        assert is_content_visible(
            ContentStatus.SCHEDULED, datetime.date(2099, 1, 1), production=False, today=TODAY
        )


class TestProductionMode:
    """Production hides anything not published yet."""

    @pytest.mark.parametrize("status", [ContentStatus.PUBLISHED, ContentStatus.FEATURED])
    def test_published_and_featured_visible(self, status):
        assert is_content_visible(status, None, production=True, today=TODAY)

    @pytest.mark.parametrize("status", [ContentStatus.DRAFT, ContentStatus.READY])
    def test_draft_and_ready_hidden(self, status):
        assert not is_content_visible(status, TODAY, production=True, today=TODAY)

    def test_missing_status_hidden(self):
        assert not is_content_visible(None, None, production=True, today=TODAY)

    def test_scheduled_on_publish_day_visible(self):
        assert is_content_visible(ContentStatus.SCHEDULED, TODAY, production=True, today=TODAY)

    def test_scheduled_in_past_visible(self):
        yesterday = TODAY - datetime.timedelta(days=1)
        assert is_content_visible(ContentStatus.SCHEDULED, yesterday, production=True, today=TODAY)

    def test_scheduled_in_future_hidden(self):
        tomorrow = TODAY + datetime.timedelta(days=1)
        assert not is_content_visible(ContentStatus.SCHEDULED, tomorrow, production=True, today=TODAY)

    def test_scheduled_without_date_hidden(self):
        assert not is_content_visible(ContentStatus.SCHEDULED, None, production=True, today=TODAY)

    def test_accepts_raw_status_string(self):
        assert is_content_visible("published", None, production=True, today=TODAY)
