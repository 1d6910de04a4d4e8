"""
Issue Bookmarks - API 服务
实时 Issues 转书签、带筛选的书签列表、AI 搜索
"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .builder import build_feed
from .config import config
from .errors import BookmarksError
from .filtering import collect_categories, collect_tags, filter_bookmarks
from .ingestion import fetch_open_issues
from .search import AISearcher
from .store import load_or_refresh

logger = logging.getLogger(__name__)

app = FastAPI(title="Issue Bookmarks API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def _error(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _fetch_live_issues():
    return fetch_open_issues(config.github_owner, config.github_repo, config.github_token or None)


@app.get("/api/github-issues")
def get_github_issues():
    """实时拉取 open issues 并转换成书签（不落盘）"""
    try:
        feed = build_feed(_fetch_live_issues())
    except BookmarksError as e:
        logger.error(f"[API] 拉取 Issues 失败: {e}")
        return _error(str(e))
    return feed.model_dump()


@app.get("/api/bookmarks")
def get_bookmarks(
    q: str = "",
    tag: List[str] = Query(default=[]),
    category: Optional[str] = None,
):
    """书签列表：优先读本地数据，过期（24h）时实时刷新"""
    try:
        feed = load_or_refresh(_fetch_live_issues, path=config.feed_path)
    except BookmarksError as e:
        logger.error(f"[API] 加载书签失败: {e}")
        return _error("加载书签失败，请稍后重试")

    matched = filter_bookmarks(feed.bookmarks, query=q, tags=tag, category=category)
    return {
        "bookmarks": [b.model_dump() for b in matched],
        "last_updated": feed.last_updated,
        "total_count": feed.total_count,
        "filtered_count": len(matched),
        "tags": collect_tags(feed.bookmarks),
        "categories": collect_categories(feed.bookmarks),
    }


@app.get("/api/ai-search")
def get_ai_search(q: Optional[str] = None, results: bool = False):
    if not q:
        return _error("Missing query parameter", status_code=400)
    try:
        return AISearcher().search(q, with_results=results)
    except BookmarksError as e:
        logger.error(f"[API] AI 搜索失败: {e}")
        return _error(str(e))
