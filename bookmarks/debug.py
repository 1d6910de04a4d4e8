"""
Issue Bookmarks - 调试工具
本地检查 Issue 正文的解析结果，方便调整模板
"""
import logging
import json
import argparse
import sys

from bookmarks.builder import build_bookmark
from bookmarks.models import GitHubIssue, GitHubLabel, GitHubMilestone, GitHubUser
from bookmarks.parsing import extract

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


SAMPLE_BODY = """<!-- 请按模板填写，提交后会自动生成书签 -->
## URL
<!-- 请在此处填写网址 -->
https://example.com/post

## 描述
<!-- 请简要描述这个网站 -->
A great article about systems design.

## 缩略图
<!-- 可选：图片链接 -->
https://example.com/cover.png

## 标签
<!-- 请添加相关标签，用逗号分隔 -->
systems, design
"""


def create_mock_issue(body: str) -> GitHubIssue:
    """创建模拟 Issue 用于测试"""
    return GitHubIssue(
        id=1,
        number=1,
        title="[书签] Example bookmark",
        body=body,
        html_url="https://github.com/example/bookmarks/issues/1",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
        user=GitHubUser(login="octocat"),
        labels=[GitHubLabel(name="reading")],
        milestone=GitHubMilestone(id=1, title="技术", description="技术文章"),
    )


def debug_body(body: str, full: bool = False) -> dict:
    if full:
        return build_bookmark(create_mock_issue(body)).model_dump()
    return extract(body).model_dump()


def main():
    parser = argparse.ArgumentParser(description="Issue Bookmarks 调试工具")
    parser.add_argument("file", nargs="?", help="Issue 正文文件（- 表示 stdin，默认使用内置示例）")
    parser.add_argument("--full", action="store_true", help="输出完整书签条目（使用模拟 Issue 元数据）")
    args = parser.parse_args()

    if args.file == "-":
        body = sys.stdin.read()
    elif args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            body = f.read()
    else:
        logger.info("未指定文件，使用内置示例正文")
        body = SAMPLE_BODY

    print(json.dumps(debug_body(body, full=args.full), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
