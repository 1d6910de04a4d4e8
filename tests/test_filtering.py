"""
Tests for search, tag and category filtering of bookmarks.
"""

from bookmarks.filtering import collect_categories, collect_tags, filter_bookmarks
from bookmarks.models import Bookmark


def _bookmark(number, title, description="", tags=(), category="未分类"):
    return Bookmark(
        id=number,
        number=number,
        url=f"https://example.com/{number}",
        title=title,
        description=description,
        tags=list(tags),
        category=category,
    )


BOOKMARKS = [
    _bookmark(1, "Python Tips", "handy tricks", ["python", "tips"], "编程"),
    _bookmark(2, "Design Systems", "component libraries", ["design"], "设计"),
    _bookmark(3, "Rust Book", "learn PYTHON's rival", ["rust"], "编程"),
]


def test_no_filters_returns_all():
    assert filter_bookmarks(BOOKMARKS) == BOOKMARKS


def test_query_matches_title_case_insensitive():
    assert [b.number for b in filter_bookmarks(BOOKMARKS, query="design")] == [2]


def test_query_matches_description():
    assert [b.number for b in filter_bookmarks(BOOKMARKS, query="python")] == [1, 3]


def test_any_selected_tag_matches():
    result = filter_bookmarks(BOOKMARKS, tags=["design", "rust"])
    assert [b.number for b in result] == [2, 3]


def test_category_filter():
    assert [b.number for b in filter_bookmarks(BOOKMARKS, category="编程")] == [1, 3]


def test_filters_combine():
    result = filter_bookmarks(BOOKMARKS, query="python", tags=["rust"], category="编程")
    assert [b.number for b in result] == [3]


def test_collect_tags_sorted_unique():
    assert collect_tags(BOOKMARKS) == ["design", "python", "rust", "tips"]


def test_collect_categories_counts():
    assert collect_categories(BOOKMARKS) == {"编程": 2, "设计": 1}
