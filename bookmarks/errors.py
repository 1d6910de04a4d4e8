"""
Issue Bookmarks - 异常定义
"""
from typing import Optional


class BookmarksError(Exception):
    """所有书签流水线异常的基类"""


class IssueSourceError(BookmarksError):
    """拉取或解析 GitHub Issues 失败"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AISearchError(BookmarksError):
    """AI 搜索不可用或模型调用失败"""
