"""
Issue Bookmarks Data Models - 数据模型定义
"""
from typing import Optional, List, Any
from pydantic import BaseModel, Field, field_validator


class GitHubUser(BaseModel):
    """Issue 作者"""
    login: str = ""


class GitHubLabel(BaseModel):
    """Issue 标签"""
    name: str


class GitHubMilestone(BaseModel):
    """Milestone（用于书签分类）"""
    id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None


class GitHubIssue(BaseModel):
    """GitHub REST API 返回的 Issue（只保留需要的字段）"""
    id: int
    number: int
    title: str = ""
    body: Optional[str] = None
    html_url: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    user: Optional[GitHubUser] = None
    labels: List[GitHubLabel] = Field(default_factory=list)
    milestone: Optional[GitHubMilestone] = None
    # 存在即表示这是 Pull Request，而不是普通 Issue
    pull_request: Optional[dict] = None

    @field_validator("labels", mode="before")
    @classmethod
    def _coerce_labels(cls, value: Any) -> Any:
        # 部分导出工具把标签写成纯字符串
        if value is None:
            return []
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None


class ExtractedRecord(BaseModel):
    """从 Issue 正文模板中提取的结构化字段"""
    url: str = ""
    description: str = ""
    thumbnail: str = ""
    tags: List[str] = Field(default_factory=list)


class Bookmark(BaseModel):
    """书签条目（Issue 元数据 + 正文提取结果）"""
    id: int
    number: int
    url: str
    title: str
    description: str = ""
    thumbnail: str = ""
    tags: List[str] = Field(default_factory=list)
    category: str
    milestone_id: Optional[int] = None
    milestone_description: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    user: str = ""
    html_url: str = ""


class BookmarkFeed(BaseModel):
    """持久化的书签数据文件"""
    bookmarks: List[Bookmark] = Field(default_factory=list)
    last_updated: Optional[str] = None
    total_count: int = 0
