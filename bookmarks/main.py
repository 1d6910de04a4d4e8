"""
Issue Bookmarks - 主程序入口
GitHub Issues -> 书签数据 (public/data/bookmarks.json)
"""
import logging
import sys
import os
from datetime import datetime
from typing import Optional

# 添加项目根目录到路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bookmarks.builder import build_feed
from bookmarks.config import config
from bookmarks.ingestion import fetch_open_issues, load_issues_file
from bookmarks.models import BookmarkFeed
from bookmarks.store import save_feed

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


def run_pipeline(
    input_path: Optional[str] = None,
    output_path: Optional[str] = None,
    dry_run: bool = False,
) -> BookmarkFeed:
    """拉取 Issues -> 解析正文 -> 生成书签数据"""

    start_time = datetime.now()
    logger.info("=" * 60)
    logger.info("🔖 书签数据生成启动")
    logger.info("=" * 60)

    # Phase 1: 数据摄取
    if input_path:
        logger.info(f"📥 从文件读取 Issues: {input_path}")
        issues = load_issues_file(input_path)
    else:
        logger.info(f"📥 从 GitHub 拉取 Issues: {config.github_owner}/{config.github_repo}")
        issues = fetch_open_issues()

    # Phase 2: 转换
    feed = build_feed(issues)

    # Phase 3: 输出
    if not dry_run:
        save_feed(feed, output_path or config.feed_path)
    else:
        logger.info("🔍 干运行模式：跳过文件保存")

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(f"🎉 完成: {feed.total_count} 条书签, 耗时 {duration:.2f} 秒")

    uncategorized = sum(1 for b in feed.bookmarks if b.category == config.uncategorized_label)
    if uncategorized:
        logger.info(f"   其中 {uncategorized} 条未分类")

    return feed


def main(argv=None):
    """主函数"""
    import argparse

    parser = argparse.ArgumentParser(description="Issue Bookmarks - 生成书签数据")
    parser.add_argument(
        "--input",
        help="从 issues.json 文件读取（默认实时请求 GitHub API）"
    )
    parser.add_argument(
        "--output",
        help=f"书签数据输出路径（默认 {config.feed_path}）"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="开启调试模式（更详细的日志）"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="干运行模式（不保存输出）"
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("调试模式已开启")

    try:
        run_pipeline(input_path=args.input, output_path=args.output, dry_run=args.dry_run)
        return 0
    except Exception as e:
        logger.error(f"❌ 书签数据生成失败: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
