"""
Issue Bookmarks - 书签数据存储
负责 bookmarks.json 的读写和过期判断
"""
import json
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from pydantic import ValidationError

from .builder import build_feed
from .config import config
from .errors import BookmarksError
from .models import BookmarkFeed, GitHubIssue

logger = logging.getLogger(__name__)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        # naive 时间按 UTC 处理
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def save_feed(feed: BookmarkFeed, path: Optional[str] = None) -> str:
    path = path or config.feed_path
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(feed.model_dump(), f, ensure_ascii=False, indent=2)
    logger.info(f"[Store] 书签数据已保存: {path} ({feed.total_count} 条)")
    return path


def load_feed(path: Optional[str] = None) -> Optional[BookmarkFeed]:
    """读取书签数据；文件不存在或损坏时返回 None"""
    path = path or config.feed_path
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return BookmarkFeed.model_validate(json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"[Store] 书签数据读取失败，视为不存在: {path}: {e}")
        return None


def is_stale(
    feed: BookmarkFeed,
    now: Optional[datetime] = None,
    max_age_hours: Optional[int] = None,
) -> bool:
    """last_updated 超过阈值（默认 24 小时）或缺失时视为过期"""
    updated_at = parse_timestamp(feed.last_updated)
    if updated_at is None:
        return True
    max_age_hours = config.feed_stale_hours if max_age_hours is None else max_age_hours
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - updated_at > timedelta(hours=max_age_hours)


def load_or_refresh(
    fetch_issues: Callable[[], List[GitHubIssue]],
    path: Optional[str] = None,
    now: Optional[datetime] = None,
    max_age_hours: Optional[int] = None,
) -> BookmarkFeed:
    """
    优先使用本地书签数据；过期或不存在时实时拉取 Issues 重新生成。

    实时拉取失败时，如果本地还有（过期的）数据就继续使用，否则抛出异常。
    """
    path = path or config.feed_path
    cached = load_feed(path)
    if cached is not None and not is_stale(cached, now=now, max_age_hours=max_age_hours):
        logger.debug(f"[Store] 使用本地书签数据: {path}")
        return cached

    reason = "不存在" if cached is None else "已过期"
    logger.info(f"[Store] 本地书签数据{reason}，实时拉取 Issues")
    try:
        feed = build_feed(fetch_issues(), now=now)
    except BookmarksError as e:
        if cached is None:
            raise
        logger.warning(f"[Store] 实时拉取失败，继续使用过期数据: {e}")
        return cached

    try:
        save_feed(feed, path)
    except OSError as e:
        logger.warning(f"[Store] 书签数据写入失败（不影响本次返回）: {e}")
    return feed
