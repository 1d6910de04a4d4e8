"""
Issue Bookmarks - Issue 正文字段提取

把按模板填写的 Issue 正文解析成结构化字段:

    ## URL        -> url
    ## 描述       -> description
    ## 缩略图     -> thumbnail
    ## 标签       -> tags

模板是用户可以随意编辑的纯文本，所以 "## 名称" 只是软分隔符：
每个字段独立查找自己的段落，找不到或为空时按字段各自的规则兜底，
一个字段缺失不会影响其他字段。整个过程没有 I/O，也不保存状态，
可以被任意并发调用。
"""
import re
from typing import Callable, List, Optional, Tuple

from ..models import ExtractedRecord

SECTION_URL = "URL"
SECTION_DESCRIPTION = "描述"
SECTION_THUMBNAIL = "缩略图"
SECTION_TAGS = "标签"

# 模板预填的引导语，连同该行剩余内容一起删除
TEMPLATE_GUIDANCE_PHRASES: Tuple[str, ...] = (
    "请在此处填写",
    "请简要描述",
    "可选",
    "请添加相关标签",
)

# 描述兜底扫描时跳过包含这些标记的行
DESCRIPTION_FALLBACK_SKIP_MARKERS: Tuple[str, ...] = (
    SECTION_THUMBNAIL,
    SECTION_TAGS,
    "其他信息",
    "https://",
)

_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_GUIDANCE_RE = re.compile(
    "(?:" + "|".join(re.escape(p) for p in TEMPLATE_GUIDANCE_PHRASES) + ")[^\n]*"
)
# 段落在下一个 ## 处结束（不要求位于行首）
_NEXT_HEADER_RE = re.compile(r"##")
_URL_RE = re.compile(r"https?://\S+")
_IMAGE_URL_RE = re.compile(r"https?://\S+\.(?:jpg|jpeg|png|gif|webp)", re.IGNORECASE)
_TAG_LABEL_RE = re.compile(r"标签[：:]\s*(.+)")
# 半角逗号、中文全角逗号和换行都作为分隔符
_TAG_SEPARATOR_RE = re.compile(r"[,，\n]")


def _header_re(name: str) -> "re.Pattern[str]":
    return re.compile(rf"^## {re.escape(name)}(?!\w)", re.MULTILINE)


_SECTION_HEADERS = {
    name: _header_re(name)
    for name in (SECTION_URL, SECTION_DESCRIPTION, SECTION_THUMBNAIL, SECTION_TAGS)
}


def sanitize(raw: str) -> str:
    """删除 HTML 注释和模板引导语，得到 clean text"""
    text = _HTML_COMMENT_RE.sub("", raw or "")
    text = _GUIDANCE_RE.sub("", text)
    return text.strip()


def section_body(text: str, name: str) -> Optional[str]:
    """
    返回第一个 "## name" 段落的内容（不含标题标记本身）。

    段落从标题开始，到下一个 ## 或文本结尾为止。
    没有该段落时返回 None；段落存在但为空时返回空字符串。
    """
    header = _SECTION_HEADERS.get(name) or _header_re(name)
    match = header.search(text)
    if not match:
        return None
    next_header = _NEXT_HEADER_RE.search(text, match.end())
    end = next_header.start() if next_header else len(text)
    return text[match.end():end]


def split_tags(text: str) -> List[str]:
    return [piece.strip() for piece in _TAG_SEPARATOR_RE.split(text or "") if piece.strip()]


def extract_url(clean: str) -> str:
    """只在 URL 段落里找，不做全文兜底"""
    body = section_body(clean, SECTION_URL)
    if body is None:
        return ""
    match = _URL_RE.search(body)
    return match.group(0) if match else ""


def extract_description(clean: str) -> str:
    body = section_body(clean, SECTION_DESCRIPTION)
    if body is not None:
        lines = [line.strip() for line in body.splitlines()]
        # 含链接的行整行丢弃
        lines = [line for line in lines if line and "https://" not in line]
        if lines:
            return " ".join(lines)

    # 兜底：全文第一条像正文的行
    for line in clean.splitlines():
        line = line.strip()
        if not line or line.startswith("##"):
            continue
        if any(marker in line for marker in DESCRIPTION_FALLBACK_SKIP_MARKERS):
            continue
        return line
    return ""


def extract_thumbnail(clean: str) -> str:
    """只接受图片扩展名结尾的链接，不做全文兜底"""
    body = section_body(clean, SECTION_THUMBNAIL)
    if body is None:
        return ""
    match = _IMAGE_URL_RE.search(body)
    return match.group(0) if match else ""


def extract_tags(clean: str) -> List[str]:
    body = section_body(clean, SECTION_TAGS)
    tags = split_tags(body.strip()) if body else []
    if tags:
        return tags

    # 兜底：全文任意位置的 "标签：a, b"
    match = _TAG_LABEL_RE.search(clean)
    if match:
        return split_tags(match.group(1))
    return []


# 字段名 -> 提取函数；每个字段独立运行，互不影响
FIELD_EXTRACTORS: List[Tuple[str, Callable[[str], object]]] = [
    ("url", extract_url),
    ("description", extract_description),
    ("thumbnail", extract_thumbnail),
    ("tags", extract_tags),
]


def extract(raw: Optional[str]) -> ExtractedRecord:
    """把 Issue 正文解析为 ExtractedRecord，任何输入都不会抛异常"""
    if not raw:
        return ExtractedRecord()
    clean = sanitize(raw)
    fields = {name: extractor(clean) for name, extractor in FIELD_EXTRACTORS}
    return ExtractedRecord(**fields)
