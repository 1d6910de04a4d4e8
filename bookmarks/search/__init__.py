"""
Issue Bookmarks Search Module - AI 搜索
"""
from .ai_search import AISearcher, fetch_search_results

__all__ = ["AISearcher", "fetch_search_results"]
