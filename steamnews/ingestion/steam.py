"""
Steam News Tide - Steam 新闻摄取
数据源: ISteamNews/GetNewsForApp/v2
"""
import html as _html
import logging
import re
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from urllib3.util.retry import Retry

from ..config import config
from ..models import RawFeedItem

logger = logging.getLogger(__name__)

_SESSION: Optional[requests.Session] = None

_SCRIPT_STYLE_RE = re.compile(r"(?is)<(script|style)[^>]*>.*?</\1>")
_TAG_RE = re.compile(r"<[^>]*>")
_BBCODE_TOKEN_RE = re.compile(r"\[/?[a-z0-9*]+(?:=[^\]]*)?\]", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def strip_html_tags(text: str) -> str:
    """Plain text for excerpts: drops tags and BBCode tokens, decodes entities."""
    if not text:
        return ""
    text = _SCRIPT_STYLE_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    text = _BBCODE_TOKEN_RE.sub(" ", text)
    text = _html.unescape(text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + "..."


def _language_code(language: str) -> str:
    lowered = (language or "").strip().lower()
    if not lowered or lowered.startswith("en"):
        return "english"
    return lowered


def _get_session() -> requests.Session:
    global _SESSION
    if _SESSION is not None:
        return _SESSION

    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent, "Accept": "application/json"})
    session.verify = config.verify_ssl

    # 重试机制（针对瞬时网络错误）
    retry_policy = Retry(
        total=3,
        backoff_factor=1.0,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_policy, pool_connections=10, pool_maxsize=20)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    _SESSION = session
    return _SESSION


@retry(
    retry=retry_if_exception_type(requests.RequestException),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)
def _request_news(app_id: str) -> dict:
    params = {
        "appid": app_id,
        "count": config.max_news_items_per_game,
        "maxlength": config.api_max_content_length,
        "format": "json",
    }
    response = _get_session().get(
        config.steam_news_api_url,
        params=params,
        timeout=config.request_timeout_seconds,
    )
    response.raise_for_status()
    return response.json()


def _to_raw_item(entry: dict, app_id: str) -> RawFeedItem:
    contents = entry.get("contents") or ""
    return RawFeedItem(
        id=str(entry.get("gid") or ""),
        title=entry.get("title") or "",
        url=entry.get("url") or "",
        raw_content=contents,
        excerpt=truncate_text(strip_html_tags(contents), config.excerpt_max_chars),
        published_at=int(entry.get("date") or 0),
        author=entry.get("author") or None,
        feed_label=entry.get("feedlabel") or "",
        feed_name=entry.get("feedname") or "",
        app_id=app_id,
    )


def fetch_steam_news(app_id: str, language: str = "english") -> List[RawFeedItem]:
    """
    获取单个游戏的 Steam 新闻。
    失败时记录日志并返回空列表。
    """
    language_code = _language_code(language)
    try:
        data = _request_news(app_id)
    except (requests.RequestException, ValueError) as e:
        logger.error(f"[SteamNews] 获取失败 appid={app_id}: {e}")
        return []

    appnews = data.get("appnews") if isinstance(data, dict) else None
    entries = (appnews or {}).get("newsitems") or []

    items: List[RawFeedItem] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        try:
            items.append(_to_raw_item(entry, app_id))
        except Exception as e:
            logger.debug(f"[SteamNews] 跳过无效条目 appid={app_id}: {e}")
    logger.debug(
        "[SteamNews] appid=%s language=%s -> %s 条", app_id, language_code, len(items)
    )
    return items
