"""
Steam News Tide - 主程序入口
拉取游戏库的 Steam 新闻，清洗正文并输出 JSON / HTML
"""
import logging
import sys
from datetime import datetime
from typing import List, Optional

from .cache import NewsCache
from .config import config
from .library import get_news_for_library, load_library
from .models import FeedEntry, LibraryGame
from .output import OutputGenerator

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


def run_pipeline(
    games: List[LibraryGame],
    language: Optional[str] = None,
    output_dir: Optional[str] = None,
    dry_run: bool = False,
) -> List[FeedEntry]:
    """运行完整的 Steam 新闻 Pipeline"""
    start_time = datetime.now()
    language = language or config.default_language
    logger.info("=" * 60)
    logger.info(f"Steam News Tide 启动 | 游戏数: {len(games)} | 语言: {language}")
    logger.info("=" * 60)

    cache = NewsCache(config.cache_ttl_seconds)
    entries = get_news_for_library(games, language, cache=cache)

    item_count = sum(len(entry.news_items) for entry in entries)
    oversized = sum(1 for entry in entries for item in entry.news_items if item.content_too_large)
    logger.info(f"[News] {len(entries)} 个游戏, {item_count} 条新闻, {oversized} 条内容过长")

    if dry_run:
        logger.info("[Output] 干运行模式，不保存输出")
    else:
        output_paths = OutputGenerator(output_dir).save(entries, language)
        for key, path in output_paths.items():
            logger.info(f"   {key}: {path}")

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(f"耗时: {duration:.2f} 秒")
    return entries


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    import argparse

    parser = argparse.ArgumentParser(description="Steam News Tide")
    parser.add_argument(
        "--library",
        default=None,
        help=f"游戏库 JSON 快照（默认 {config.library_path}）"
    )
    parser.add_argument(
        "--app-id",
        action="append",
        default=[],
        help="直接指定 Steam appid，可重复"
    )
    parser.add_argument("--language", default=None, help="新闻语言")
    parser.add_argument("--output-dir", default=None, help="输出目录")
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
        if args.app_id:
            games = [LibraryGame(object_id=app_id, title=app_id) for app_id in args.app_id]
        else:
            games = load_library(args.library)
        run_pipeline(
            games,
            language=args.language,
            output_dir=args.output_dir,
            dry_run=args.dry_run,
        )
        return 0
    except Exception as e:
        logger.exception(f"Pipeline 执行失败: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
