"""
Issue Bookmarks Parsing Module - Issue 正文解析
"""
from .extractor import (
    FIELD_EXTRACTORS,
    extract,
    extract_description,
    extract_tags,
    extract_thumbnail,
    extract_url,
    sanitize,
    section_body,
)

__all__ = [
    "FIELD_EXTRACTORS",
    "extract",
    "extract_description",
    "extract_tags",
    "extract_thumbnail",
    "extract_url",
    "sanitize",
    "section_body",
]
