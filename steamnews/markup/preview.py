"""
Steam News Tide - 新闻封面图提取
"""
import logging
from typing import Optional

from .errors import InputTooLargeError, check_input_size
from .preprocess import preprocess
from .sanitizer import BLOCKED_TAGS, parse_markup
from .urls import is_safe_absolute_url, normalize_url

logger = logging.getLogger(__name__)


def extract_preview_image(markup, *, preprocessed: bool = False) -> Optional[str]:
    """
    取正文中第一张 <img> 的 src 作为封面图。

    Only the first image in document order is considered; if its src is not
    an absolute http(s) URL the result is None rather than a later image.
    Images inside BLOCKED_TAGS never reach the rendered content and are
    skipped. Never raises.
    """
    if not isinstance(markup, str) or not markup:
        return None
    try:
        html = markup if preprocessed else preprocess(markup)
        check_input_size(html)
        soup = parse_markup(html)
        # sanitize 会连同内容一起删除的元素里的图片不算
        img = next(
            (tag for tag in soup.find_all("img") if tag.find_parent(list(BLOCKED_TAGS)) is None),
            None,
        )
        if img is None:
            return None
        src = img.get("src")
        if isinstance(src, list):
            src = " ".join(src)
        if not is_safe_absolute_url(src):
            return None
        return normalize_url(src)
    except InputTooLargeError as exc:
        logger.debug("[Preview] 跳过超长内容: %s", exc)
        return None
    except Exception as exc:
        logger.debug("[Preview] 解析失败: %s", exc)
        return None
