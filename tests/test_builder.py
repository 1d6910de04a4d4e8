"""
Tests for merging issue metadata with extracted fields into bookmarks.
"""

from datetime import datetime, timezone

from bookmarks.builder import (
    build_bookmark,
    build_bookmarks,
    build_feed,
    format_timestamp,
    merge_tags,
    strip_title_prefix,
)
from bookmarks.config import config


class TestTitle:
    def test_prefix_removed(self):
        assert strip_title_prefix("[书签] Hello") == "Hello"

    def test_prefix_without_space(self):
        assert strip_title_prefix("[书签]Hello") == "Hello"

    def test_prefix_only_at_start(self):
        assert strip_title_prefix("Hello [书签]") == "Hello [书签]"

    def test_custom_prefix(self):
        assert strip_title_prefix("[bookmark] Hi", prefix="[bookmark]") == "Hi"


class TestMergeTags:
    def test_union_without_duplicates(self):
        assert merge_tags(["a", "b"], ["b", "c", "a"]) == ["a", "b", "c"]

    def test_empty_values_dropped(self):
        assert merge_tags(["", "a"], []) == ["a"]


class TestBuildBookmark:
    def test_fields_from_issue_and_body(self, make_issue):
        bookmark = build_bookmark(make_issue(7))
        assert bookmark.id == 1007
        assert bookmark.number == 7
        assert bookmark.url == "https://example.com/7"
        assert bookmark.title == "Bookmark 7"
        assert bookmark.description == "Description 7"
        assert bookmark.thumbnail == ""
        assert set(bookmark.tags) == {"reading", "alpha", "beta"}
        assert bookmark.user == "octocat"
        assert bookmark.html_url == "https://github.com/owner/repo/issues/7"
        assert bookmark.created_at == "2024-01-01T00:00:00Z"
        assert bookmark.updated_at == "2024-01-02T00:00:00Z"

    def test_url_falls_back_to_issue_link(self, make_issue):
        bookmark = build_bookmark(make_issue(3, body="just a note"))
        assert bookmark.url == "https://github.com/owner/repo/issues/3"
        assert bookmark.description == "just a note"

    def test_empty_body(self, make_issue):
        bookmark = build_bookmark(make_issue(4, body=None, labels=[]))
        assert bookmark.url == bookmark.html_url
        assert bookmark.description == ""
        assert bookmark.tags == []

    def test_label_and_body_tag_deduplicated(self, make_issue):
        issue = make_issue(5, body="## 标签\nreading, extra", labels=[{"name": "reading"}])
        tags = build_bookmark(issue).tags
        assert sorted(tags) == ["extra", "reading"]

    def test_string_labels_accepted(self, make_issue):
        issue = make_issue(6, labels=["plain"], body="")
        assert build_bookmark(issue).tags == ["plain"]

    def test_uncategorized_without_milestone(self, make_issue):
        bookmark = build_bookmark(make_issue(1))
        assert bookmark.category == config.uncategorized_label
        assert bookmark.milestone_id is None
        assert bookmark.milestone_description == ""

    def test_category_from_milestone(self, make_issue):
        milestone = {"id": 42, "title": "工具", "description": None}
        bookmark = build_bookmark(make_issue(1, milestone=milestone))
        assert bookmark.category == "工具"
        assert bookmark.milestone_id == 42
        assert bookmark.milestone_description == ""

    def test_missing_user(self, make_issue):
        assert build_bookmark(make_issue(1, user=None)).user == ""


class TestBuildFeed:
    def test_pull_requests_filtered(self, make_issue):
        issues = [
            make_issue(1),
            make_issue(2, pull_request={"url": "https://api.github.com/pulls/2"}),
            make_issue(3),
        ]
        assert [b.number for b in build_bookmarks(issues)] == [1, 3]

    def test_feed_metadata(self, make_issue):
        now = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        feed = build_feed([make_issue(1), make_issue(2)], now=now)
        assert feed.total_count == 2
        assert feed.last_updated == "2024-05-01T12:30:00.000Z"

    def test_empty_feed(self):
        feed = build_feed([])
        assert feed.bookmarks == []
        assert feed.total_count == 0
        assert feed.last_updated

    def test_feed_document_keys(self, make_issue):
        document = build_feed([make_issue(1)]).model_dump()
        assert set(document) == {"bookmarks", "last_updated", "total_count"}
        assert set(document["bookmarks"][0]) == {
            "id", "number", "url", "title", "description", "thumbnail", "tags",
            "category", "milestone_id", "milestone_description", "created_at",
            "updated_at", "user", "html_url",
        }


def test_format_timestamp_naive_is_utc():
    assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"
