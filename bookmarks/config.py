"""
Issue Bookmarks Configuration - 配置文件
"""
import os
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()


def _get_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


class Config(BaseModel):
    """书签流水线配置"""

    # GitHub 仓库（书签数据来源）
    github_owner: str = os.getenv("GITHUB_OWNER", "your-github-username")
    github_repo: str = os.getenv("GITHUB_REPO", "your-repo-name")
    github_token: str = os.getenv("GITHUB_TOKEN", "")  # 可选，未设置时匿名访问（限流更严格）
    github_api_base: str = os.getenv("BOOKMARKS_GITHUB_API_BASE", "https://api.github.com")
    github_per_page: int = int(os.getenv("BOOKMARKS_PER_PAGE", "100"))
    # 分页上限，避免异常仓库无限翻页
    github_max_pages: int = int(os.getenv("BOOKMARKS_MAX_PAGES", "10"))
    github_timeout_seconds: float = 30.0
    github_user_agent: str = "Issue-Bookmarks/1.0"

    # 网络请求配置
    requests_verify_ssl: bool = _get_bool_env("BOOKMARKS_VERIFY_SSL", True)
    requests_use_proxy: bool = _get_bool_env("BOOKMARKS_USE_PROXY", True)
    suppress_insecure_warnings: bool = _get_bool_env("BOOKMARKS_SUPPRESS_INSECURE_WARNINGS", True)

    # 书签转换配置
    # Issue 标题前缀（模板自动添加），展示前去掉
    title_prefix: str = "[书签]"
    # 没有 milestone 的书签归入该分类
    uncategorized_label: str = "未分类"

    # 输出配置
    issues_dump_path: str = os.getenv("BOOKMARKS_ISSUES_PATH", "issues.json")
    feed_path: str = os.getenv("BOOKMARKS_FEED_PATH", "public/data/bookmarks.json")
    # 书签数据超过该时长视为过期，触发实时拉取
    feed_stale_hours: int = int(os.getenv("BOOKMARKS_STALE_HOURS", "24"))

    # AI 搜索配置（DashScope OpenAI 兼容接口 + Google Custom Search）
    dashscope_api_key: str = os.getenv("DASHSCOPE_API_KEY", "")
    dashscope_base_url: str = "https://dashscope.aliyuncs.com/compatible-mode/v1"
    search_model: str = os.getenv("BOOKMARKS_SEARCH_MODEL", "qwen-flash")
    search_timeout_seconds: float = 30.0
    google_search_api_key: str = os.getenv("GOOGLE_SEARCH_API_KEY", "")
    google_search_engine_id: str = os.getenv("GOOGLE_SEARCH_ENGINE_ID", "")
    google_search_url: str = "https://www.googleapis.com/customsearch/v1"
    search_result_count: int = 5

    # 允许跨域访问 API 的前端地址
    cors_origins: List[str] = [
        origin.strip()
        for origin in os.getenv("BOOKMARKS_CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]


# 全局配置实例
config = Config()
