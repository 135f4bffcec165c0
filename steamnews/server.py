"""
Steam News Tide - 轻量新闻服务
供客户端拉取已清洗的 Steam 新闻
"""
import logging
from typing import List, Optional

from fastapi import FastAPI

from .cache import NewsCache
from .config import config
from .ingestion import fetch_steam_news
from .library import get_news_for_library, load_library
from .models import FeedEntry

logger = logging.getLogger(__name__)

app = FastAPI(title="Steam News Tide API")
app.state.news_cache = NewsCache(config.cache_ttl_seconds)


@app.get("/steam-news", response_model=List[FeedEntry])
def get_steam_news(language: Optional[str] = None):
    try:
        games = load_library(config.library_path)
    except (OSError, ValueError) as e:
        logger.error(f"[Server] 读取游戏库失败: {e}")
        return []
    return get_news_for_library(
        games,
        language or config.default_language,
        cache=app.state.news_cache,
        fetcher=fetch_steam_news,
    )


@app.post("/steam-news/cache/clear")
def clear_steam_news_cache():
    app.state.news_cache.clear()
    return {"status": "ok"}
