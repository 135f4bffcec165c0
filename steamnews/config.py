"""
Steam News Tide Configuration - 配置文件
"""
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()


def _get_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


class Config(BaseModel):
    """Pipeline 配置"""

    # 网络请求配置
    steam_news_api_url: str = os.getenv(
        "STEAM_NEWS_API_URL",
        "https://api.steampowered.com/ISteamNews/GetNewsForApp/v2/",
    )
    request_timeout_seconds: float = float(os.getenv("STEAM_NEWS_REQUEST_TIMEOUT", "5"))
    verify_ssl: bool = _get_bool_env("STEAM_NEWS_VERIFY_SSL", True)
    user_agent: str = os.getenv(
        "STEAM_NEWS_USER_AGENT",
        "Mozilla/5.0 (compatible; SteamNewsTide/1.0)",
    )

    # 每个游戏拉取的新闻条数 / 最多展示的游戏数
    max_news_items_per_game: int = int(os.getenv("STEAM_NEWS_MAX_ITEMS_PER_GAME", "3"))
    max_games_with_news: int = int(os.getenv("STEAM_NEWS_MAX_GAMES", "10"))
    # Steam 端 maxlength 参数，0 表示返回完整内容
    api_max_content_length: int = int(os.getenv("STEAM_NEWS_API_MAXLENGTH", "0"))
    fetch_max_workers: int = int(os.getenv("STEAM_NEWS_FETCH_WORKERS", "8"))
    default_language: str = os.getenv("STEAM_NEWS_LANGUAGE", "english")

    # 缓存
    cache_ttl_seconds: int = int(os.getenv("STEAM_NEWS_CACHE_TTL", "3600"))

    # 内容处理
    excerpt_max_chars: int = int(os.getenv("STEAM_NEWS_EXCERPT_MAX_CHARS", "200"))
    # 超过此长度的内容不做清洗（限制解析最坏耗时）
    max_input_chars: int = int(os.getenv("STEAM_NEWS_MAX_INPUT_CHARS", "65536"))

    # 输入 / 输出
    library_path: str = os.getenv("STEAM_NEWS_LIBRARY_PATH", "data/library.json")
    output_dir: str = os.getenv("STEAM_NEWS_OUTPUT_DIR", "output")


# 全局配置实例
config = Config()
