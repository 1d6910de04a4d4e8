"""
Issue Bookmarks Ingestion Module - 数据摄取模块
"""
from .github_issues import (
    fetch_open_issues,
    load_issues_file,
    filter_pull_requests,
    parse_issues,
)

__all__ = [
    "fetch_open_issues",
    "load_issues_file",
    "filter_pull_requests",
    "parse_issues",
]
