"""
Steam News Tide - 新闻条目组装

Turns raw feed items into renderable NewsItems: content is preprocessed
once, sanitized for display, and the same preprocessed text is searched for
a preview image. Each item is handled on its own, so callers may fan this
out across threads freely.
"""
import html
import logging
from typing import Iterable, Optional

from .markup import (
    InputTooLargeError,
    extract_preview_image,
    is_safe_absolute_url,
    normalize_url,
    preprocess,
    sanitize,
)
from .markup.errors import check_input_size
from .models import FeedEntry, LibraryGame, NewsItem, RawFeedItem

logger = logging.getLogger(__name__)


def _excerpt_paragraph(excerpt: str) -> str:
    text = (excerpt or "").strip()
    return f"<p>{html.escape(text, quote=True)}</p>" if text else ""


def _safe_fallback(url: Optional[str]) -> Optional[str]:
    return normalize_url(url) if is_safe_absolute_url(url) else None


def build_news_item(item: RawFeedItem, fallback_image: Optional[str] = None) -> NewsItem:
    """Sanitize one raw item and pick its preview image."""
    content_html = ""
    preview = None
    too_large = False
    try:
        check_input_size(item.raw_content)
        prepared = preprocess(item.raw_content)
        content_html = sanitize(prepared)
        preview = extract_preview_image(prepared, preprocessed=True)
    except InputTooLargeError as exc:
        logger.warning("[Sanitizer] 内容过长，改用摘要: id=%s | %s", item.id, exc)
        content_html = _excerpt_paragraph(item.excerpt)
        too_large = True

    return NewsItem(
        id=item.id,
        title=item.title,
        url=item.url,
        excerpt=item.excerpt,
        published_at=item.published_at,
        author=item.author,
        feed_label=item.feed_label,
        feed_name=item.feed_name,
        app_id=item.app_id,
        content_html=content_html,
        preview_image_url=preview or _safe_fallback(fallback_image),
        content_too_large=too_large,
    )


def assemble_feed_entry(game: LibraryGame, items: Iterable[RawFeedItem]) -> FeedEntry:
    fallback = _safe_fallback(game.library_image_url) or _safe_fallback(game.cover_image_url)
    return FeedEntry(
        app_id=game.object_id,
        game_title=game.title,
        news_items=[build_news_item(item, fallback) for item in items],
        cover_image_url=game.cover_image_url,
        library_image_url=game.library_image_url,
        is_favorite=game.favorite,
        is_installed=bool(game.executable_path),
        last_played=game.last_time_played,
    )
