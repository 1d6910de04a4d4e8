"""
Issue Bookmarks - AI 搜索
先用 Google Custom Search 拿到候选网页，再让 Qwen 选出最相关的链接
"""
import logging
from typing import List, Optional

import requests
from openai import OpenAI
from tenacity import retry, stop_after_attempt, wait_exponential

from ..config import config
from ..errors import AISearchError

logger = logging.getLogger(__name__)


def fetch_search_results(query: str, num: Optional[int] = None) -> List[dict]:
    """
    Google Custom Search JSON API，返回 [{title, link, snippet}]
    任何失败都返回空列表，由调用方退回纯 AI 回答
    """
    if not config.google_search_api_key or not config.google_search_engine_id:
        logger.warning("[AISearch] 未设置 GOOGLE_SEARCH_API_KEY / GOOGLE_SEARCH_ENGINE_ID，跳过网页搜索")
        return []

    params = {
        "key": config.google_search_api_key,
        "cx": config.google_search_engine_id,
        "q": query,
        "num": str(num or config.search_result_count),
    }
    try:
        resp = requests.get(config.google_search_url, params=params, timeout=config.search_timeout_seconds)
        if resp.status_code >= 400:
            logger.error("[AISearch] Google Search API 错误: %s", resp.status_code)
            return []
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("[AISearch] 获取搜索结果失败: %s", exc)
        return []

    if not isinstance(data, dict):
        logger.error("[AISearch] Google Search API 返回格式异常: %s", type(data).__name__)
        return []
    items = data.get("items") or []
    return [
        {
            "title": item.get("title", ""),
            "link": item.get("link", ""),
            "snippet": item.get("snippet") or "",
        }
        for item in items
        if isinstance(item, dict)
    ]


def _build_pick_prompt(query: str, results: List[dict]) -> str:
    results_text = "\n".join(
        f"""{i}. Title: {r.get('title', '')}
   URL: {r.get('link', '')}
   Snippet: {r.get('snippet') or 'N/A'}
"""
        for i, r in enumerate(results, 1)
    )
    return f"""Based on the following search results for "{query}", which one is the most relevant and useful? Return ONLY the URL of the best result without any additional text.

Results:
{results_text}"""


class AISearcher:
    """AI 搜索：直接回答，或从搜索结果里挑出最佳链接"""

    def __init__(self, client: Optional[OpenAI] = None):
        if client is not None:
            self.client = client
        elif not config.dashscope_api_key:
            logger.warning("[AISearch] 未设置 DASHSCOPE_API_KEY, AI 搜索不可用")
            self.client = None
        else:
            self.client = OpenAI(
                api_key=config.dashscope_api_key,
                base_url=config.dashscope_base_url,
            )

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=2, max=10), reraise=True)
    def _call_model(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=config.search_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.3,
            max_tokens=1000,
        )
        return (response.choices[0].message.content or "").strip()

    def _ask(self, prompt: str) -> str:
        if not self.client:
            raise AISearchError("AI 搜索未配置（缺少 DASHSCOPE_API_KEY）")
        try:
            return self._call_model(prompt)
        except Exception as exc:
            raise AISearchError(f"模型调用失败: {exc}") from exc

    def search(self, query: str, with_results: bool = False) -> dict:
        if not with_results:
            return {"result": self._ask(query)}

        results = fetch_search_results(query)
        if not results:
            # 没有搜索结果时退回纯 AI 回答
            return {"result": self._ask(query)}

        best_url = self._ask(_build_pick_prompt(query, results))
        logger.info(f"[AISearch] '{query}' -> {best_url}")
        return {"result": best_url, "allResults": results}
