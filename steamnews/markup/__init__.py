"""
Steam News Tide Markup Module - 不可信内容处理
"""
from .errors import InputTooLargeError
from .preprocess import preprocess
from .preview import extract_preview_image
from .sanitizer import ALLOWED_TAGS, BLOCKED_TAGS, sanitize
from .urls import is_safe_absolute_url, normalize_url

__all__ = [
    "InputTooLargeError",
    "preprocess",
    "sanitize",
    "extract_preview_image",
    "is_safe_absolute_url",
    "normalize_url",
    "ALLOWED_TAGS",
    "BLOCKED_TAGS",
]
