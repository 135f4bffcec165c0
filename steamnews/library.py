"""
Steam News Tide - 游戏库新闻聚合
按相关度（收藏 / 已安装 / 最近游玩）挑选要展示新闻的游戏
"""
import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from .assembler import assemble_feed_entry
from .cache import NewsCache
from .config import config
from .ingestion import fetch_steam_news
from .models import FeedEntry, LibraryGame, RawFeedItem

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str], List[RawFeedItem]]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def calculate_relevance_score(
    game: LibraryGame,
    has_news: bool,
    now: Optional[datetime] = None,
) -> int:
    """收藏 +100，已安装 +50，最近游玩 +40/+20/+10；没有新闻为 -1"""
    if not has_news:
        return -1

    score = 0
    if game.favorite:
        score += 100
    if game.executable_path:
        score += 50
    if game.last_time_played:
        now = _as_utc(now or datetime.now(timezone.utc))
        days_since_play = (now - _as_utc(game.last_time_played)).total_seconds() / 86400
        if days_since_play <= 7:
            score += 40
        elif days_since_play <= 30:
            score += 20
        elif days_since_play <= 90:
            score += 10
    return score


def load_library(path: Optional[str] = None) -> List[LibraryGame]:
    """读取本地游戏库快照（JSON 数组）"""
    path = path or config.library_path
    if not os.path.exists(path):
        logger.warning(f"[Library] 游戏库文件不存在: {path}")
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    games: List[LibraryGame] = []
    for raw in data if isinstance(data, list) else []:
        try:
            games.append(LibraryGame.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"[Library] 跳过无效记录: {e}")
    logger.info(f"[Library] 读取 {len(games)} 个游戏: {path}")
    return games


def _is_steam_game(game: LibraryGame) -> bool:
    return not game.is_deleted and game.shop == "steam" and bool(game.object_id)


def get_news_for_library(
    games: Sequence[LibraryGame],
    language: Optional[str] = None,
    *,
    cache: Optional[NewsCache] = None,
    fetcher: Fetcher = fetch_steam_news,
    now: Optional[datetime] = None,
) -> List[FeedEntry]:
    """
    拉取游戏库中 Steam 游戏的新闻并按相关度排序。

    - 缓存未过期时直接返回缓存
    - 没有新闻的游戏不展示
    - 最多返回 config.max_games_with_news 个游戏
    """
    language = language or config.default_language
    if cache is not None:
        cached = cache.get(language)
        if cached is not None:
            logger.info("[Library] 返回缓存的 Steam 新闻")
            return cached

    def collect(game: LibraryGame) -> Tuple[FeedEntry, int]:
        entry = assemble_feed_entry(game, fetcher(game.object_id, language))
        return entry, calculate_relevance_score(game, bool(entry.news_items), now)

    try:
        steam_games = [game for game in games if _is_steam_game(game)]
        with ThreadPoolExecutor(max_workers=max(1, config.fetch_max_workers)) as executor:
            results = list(executor.map(collect, steam_games))
    except Exception as e:
        logger.error(f"[Library] 获取 Steam 新闻失败: {e}")
        return []

    ranked = [result for result in results if result[0].news_items]
    ranked.sort(key=lambda result: result[1], reverse=True)
    entries = [entry for entry, _ in ranked[: config.max_games_with_news]]

    if cache is not None:
        cache.put(language, entries)
    logger.info(f"[Library] 获取到 {len(entries)} 个游戏的 Steam 新闻")
    return entries
