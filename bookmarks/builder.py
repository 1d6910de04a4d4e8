"""
Issue Bookmarks - 书签生成模块
把 Issue 元数据和正文提取结果合并成书签数据
"""
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .config import config
from .ingestion import filter_pull_requests
from .models import Bookmark, BookmarkFeed, GitHubIssue
from .parsing import extract

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601，毫秒精度，Z 结尾"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def strip_title_prefix(title: str, prefix: Optional[str] = None) -> str:
    prefix = config.title_prefix if prefix is None else prefix
    title = title or ""
    if not prefix:
        return title
    return re.sub(rf"^{re.escape(prefix)}\s*", "", title)


def merge_tags(*groups: Iterable[str]) -> List[str]:
    """合并标签并去重（保留首次出现的顺序）"""
    merged: dict = {}
    for group in groups:
        for tag in group:
            if tag:
                merged.setdefault(tag, True)
    return list(merged)


def build_bookmark(issue: GitHubIssue) -> Bookmark:
    """单条 Issue -> 书签"""
    parsed = extract(issue.body or "")
    milestone = issue.milestone

    return Bookmark(
        id=issue.id,
        number=issue.number,
        url=parsed.url or issue.html_url,
        title=strip_title_prefix(issue.title),
        description=parsed.description,
        thumbnail=parsed.thumbnail,
        tags=merge_tags((label.name for label in issue.labels), parsed.tags),
        category=milestone.title if milestone and milestone.title else config.uncategorized_label,
        milestone_id=milestone.id if milestone else None,
        milestone_description=(milestone.description or "") if milestone else "",
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        user=issue.user.login if issue.user else "",
        html_url=issue.html_url,
    )


def build_bookmarks(issues: Iterable[GitHubIssue]) -> List[Bookmark]:
    issues = list(issues)
    candidates = filter_pull_requests(issues)
    skipped_prs = len(issues) - len(candidates)
    if skipped_prs:
        logger.info(f"[Feed] 过滤掉 {skipped_prs} 个 Pull Request")

    bookmarks: List[Bookmark] = []
    for issue in candidates:
        try:
            bookmarks.append(build_bookmark(issue))
        except ValueError as e:
            logger.warning(f"[Feed] Issue #{issue.number} 转换失败，已跳过: {e}")
    return bookmarks


def build_feed(issues: Iterable[GitHubIssue], now: Optional[datetime] = None) -> BookmarkFeed:
    """生成完整的书签数据文件内容"""
    bookmarks = build_bookmarks(issues)
    now = now or datetime.now(timezone.utc)
    feed = BookmarkFeed(
        bookmarks=bookmarks,
        last_updated=format_timestamp(now),
        total_count=len(bookmarks),
    )
    logger.info(f"[Feed] 生成 {feed.total_count} 条书签")
    return feed
