"""
Issue Bookmarks - 书签筛选
关键词搜索、标签筛选、分类筛选
"""
from collections import Counter
from typing import Dict, Iterable, List, Optional

from .models import Bookmark


def _matches_query(bookmark: Bookmark, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return needle in (bookmark.title or "").lower() or needle in (bookmark.description or "").lower()


def _matches_tags(bookmark: Bookmark, tags: List[str]) -> bool:
    # 选中任意一个标签即命中
    if not tags:
        return True
    return any(tag in bookmark.tags for tag in tags)


def filter_bookmarks(
    bookmarks: Iterable[Bookmark],
    query: str = "",
    tags: Optional[Iterable[str]] = None,
    category: Optional[str] = None,
) -> List[Bookmark]:
    query = (query or "").strip()
    selected_tags = [tag for tag in (tags or []) if tag]
    return [
        bookmark
        for bookmark in bookmarks
        if _matches_query(bookmark, query)
        and _matches_tags(bookmark, selected_tags)
        and (not category or bookmark.category == category)
    ]


def collect_tags(bookmarks: Iterable[Bookmark]) -> List[str]:
    """全部书签出现过的标签（去重排序）"""
    return sorted({tag for bookmark in bookmarks for tag in bookmark.tags})


def collect_categories(bookmarks: Iterable[Bookmark]) -> Dict[str, int]:
    """分类 -> 书签数量，按数量降序"""
    counts = Counter(bookmark.category for bookmark in bookmarks)
    return dict(sorted(counts.items(), key=lambda x: (-x[1], x[0])))
