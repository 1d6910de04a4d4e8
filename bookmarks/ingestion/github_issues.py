"""
Issue Bookmarks - GitHub Issues 数据摄取
数据源: GitHub REST API (open issues) / CI 导出的 issues.json
"""
import json
import logging
import os
from typing import Iterable, List, Optional

import requests
import urllib3
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from urllib3.util.retry import Retry

from ..config import config
from ..errors import IssueSourceError
from ..models import GitHubIssue

logger = logging.getLogger(__name__)

_SESSION: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    global _SESSION
    if _SESSION is not None:
        return _SESSION

    # 抑制 SSL 警告（关闭 SSL 校验时）
    if not config.requests_verify_ssl and config.suppress_insecure_warnings:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    session = requests.Session()
    if not config.requests_use_proxy:
        logger.info("[HTTP] 已禁用代理（trust_env=False）")
        session.trust_env = False
        session.proxies = {"http": None, "https": None}

    # 重试机制（针对瞬时网络错误和 GitHub 限流）
    retry_policy = Retry(
        total=3,
        backoff_factor=1.0,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "HEAD"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_policy, pool_connections=4, pool_maxsize=8)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    _SESSION = session
    return _SESSION


def _build_headers(token: Optional[str]) -> dict:
    headers = {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": config.github_user_agent,
    }
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    reraise=True,
)
def _fetch_issues_page(url: str, params: dict, headers: dict) -> list:
    session = _get_session()
    response = session.get(
        url,
        params=params,
        headers=headers,
        timeout=config.github_timeout_seconds,
        verify=config.requests_verify_ssl,
    )
    if response.status_code >= 400:
        raise IssueSourceError(
            f"GitHub API error: {response.status_code}",
            status_code=response.status_code,
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise IssueSourceError(f"GitHub API 返回了无法解析的 JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise IssueSourceError(f"GitHub API 返回格式异常: {type(payload).__name__}")
    return payload


def parse_issues(raw_issues: Iterable[dict]) -> List[GitHubIssue]:
    """把原始 JSON 转成 GitHubIssue，单条格式错误只跳过该条"""
    issues: List[GitHubIssue] = []
    for raw in raw_issues:
        try:
            issues.append(GitHubIssue.model_validate(raw))
        except ValidationError as exc:
            issue_ref = raw.get("number") if isinstance(raw, dict) else raw
            logger.warning(f"[GitHub] 跳过无法解析的 Issue {issue_ref}: {exc.error_count()} 个字段错误")
    return issues


def filter_pull_requests(issues: Iterable[GitHubIssue]) -> List[GitHubIssue]:
    """Issues 接口也会返回 PR，书签只来自普通 Issue"""
    return [issue for issue in issues if not issue.is_pull_request]


def fetch_open_issues(
    owner: Optional[str] = None,
    repo: Optional[str] = None,
    token: Optional[str] = None,
) -> List[GitHubIssue]:
    """
    从 GitHub 拉取仓库的全部 open issues（自动翻页）
    API: GET /repos/{owner}/{repo}/issues?state=open
    """
    owner = owner or config.github_owner
    repo = repo or config.github_repo
    token = token if token is not None else (config.github_token or None)

    url = f"{config.github_api_base.rstrip('/')}/repos/{owner}/{repo}/issues"
    headers = _build_headers(token)
    per_page = max(1, config.github_per_page)

    raw_issues: List[dict] = []
    for page in range(1, max(1, config.github_max_pages) + 1):
        params = {"state": "open", "per_page": per_page, "page": page}
        try:
            batch = _fetch_issues_page(url, params, headers)
        except requests.RequestException as exc:
            raise IssueSourceError(f"请求 GitHub 失败: {exc}") from exc
        raw_issues.extend(batch)
        logger.debug(f"[GitHub] 第 {page} 页: {len(batch)} 条")
        if len(batch) < per_page:
            break
    else:
        logger.warning(f"[GitHub] 已达到分页上限 {config.github_max_pages}，剩余 Issue 未拉取")

    issues = parse_issues(raw_issues)
    logger.info(f"[GitHub] {owner}/{repo} 获取 {len(issues)} 条 open issues")
    return issues


def load_issues_file(path: Optional[str] = None) -> List[GitHubIssue]:
    """读取 CI 导出的 issues.json（GitHub API 原始数组）"""
    path = path or config.issues_dump_path
    if not os.path.exists(path):
        raise IssueSourceError(f"Issues 文件不存在: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise IssueSourceError(f"读取 Issues 文件失败: {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise IssueSourceError(f"Issues 文件格式异常（需要 JSON 数组）: {path}")

    issues = parse_issues(payload)
    logger.info(f"[GitHub] 从 {path} 读取 {len(issues)} 条 issues")
    return issues
